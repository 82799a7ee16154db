"""Tests for skill parser."""

from pathlib import Path

from automatic.skills.parser import frontmatter_name, parse_skill, split_frontmatter


def test_parse_full_frontmatter(tmp_path: Path) -> None:
    skill_dir = tmp_path / "code-reviewer"
    skill_dir.mkdir()
    (skill_dir / "SKILL.md").write_text(
        "---\n"
        "name: code-reviewer\n"
        "description: Reviews code for quality\n"
        "---\n"
        "\n"
        "# Code Reviewer\n\n"
        "Review all code changes.\n",
        encoding="utf-8",
    )
    skill = parse_skill(skill_dir / "SKILL.md")
    assert skill.name == "code-reviewer"
    assert skill.metadata.description == "Reviews code for quality"
    assert "Review all code changes." in skill.content


def test_parse_no_frontmatter(tmp_path: Path) -> None:
    skill_dir = tmp_path / "simple"
    skill_dir.mkdir()
    (skill_dir / "SKILL.md").write_text("# Simple\n", encoding="utf-8")

    skill = parse_skill(skill_dir / "SKILL.md")
    assert skill.name == "simple"
    assert skill.metadata.name == "simple"
    assert skill.metadata.description == ""


def test_broken_yaml_is_treated_as_body() -> None:
    text = "---\nname: [unclosed\n---\nbody\n"
    assert split_frontmatter(text) == ({}, text)


def test_frontmatter_name() -> None:
    assert frontmatter_name("---\nname: pdf-tools\n---\nbody\n") == "pdf-tools"
    assert frontmatter_name("no frontmatter") is None
