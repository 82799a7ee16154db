"""Tests for rule parser (YAML frontmatter + markdown)."""

from pathlib import Path

import pytest

from automatic.rules.models import Rule
from automatic.rules.parser import is_valid_machine_name, parse_rule, serialize_rule


def test_parse_with_name(tmp_path: Path) -> None:
    path = tmp_path / "python-style.md"
    path.write_text(
        "---\nname: Python Style\n---\n\nAlways use type hints.\n",
        encoding="utf-8",
    )
    rule = parse_rule(path)
    assert rule.rule_id == "python-style"
    assert rule.name == "Python Style"
    assert rule.content == "Always use type hints.\n"


def test_parse_no_frontmatter_falls_back_to_id(tmp_path: Path) -> None:
    path = tmp_path / "plain.md"
    path.write_text("# Just Markdown\n", encoding="utf-8")
    rule = parse_rule(path)
    assert rule.name == "plain"
    assert rule.content == "# Just Markdown\n"


def test_parse_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.md"
    path.write_text("", encoding="utf-8")
    rule = parse_rule(path)
    assert rule.name == "empty"
    assert rule.content == ""


def test_serialize_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "roundtrip.md"
    rule = Rule(rule_id="roundtrip", name="Round Trip", source_path=path, content="Body.\n")
    path.write_text(serialize_rule(rule), encoding="utf-8")

    parsed = parse_rule(path)
    assert parsed.name == "Round Trip"
    assert "Body." in parsed.content


@pytest.mark.parametrize(
    "value,valid",
    [
        ("code-style", True),
        ("a1", True),
        ("Code-Style", False),
        ("-leading", False),
        ("trailing-", False),
        ("double--dash", False),
        ("1digit", False),
        ("a" * 128, True),
        ("a" * 129, False),
    ],
)
def test_machine_names(value: str, valid: bool) -> None:
    assert is_valid_machine_name(value) is valid
