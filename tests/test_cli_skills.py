"""Tests for skills CLI commands."""

from pathlib import Path

import pytest

from automatic import __main__ as cli_module
from automatic.__main__ import cli
from automatic.config import AutomaticPaths
from automatic.errors import RemoteFetchError
from automatic.registry.projects import ProjectRepository


def test_skills_list_empty(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["skills", "list"])
    assert result.exit_code == 0
    assert "No skills installed." in result.output


def test_skills_list_show_delete(cli_runner, write_skill) -> None:
    write_skill("pdf", body="Handle PDFs.\n")

    listed = cli_runner.invoke(cli, ["skills", "list"])
    assert listed.exit_code == 0
    assert "pdf" in listed.output

    shown = cli_runner.invoke(cli, ["skills", "show", "pdf"])
    assert shown.exit_code == 0
    assert "Handle PDFs." in shown.output

    deleted = cli_runner.invoke(cli, ["skills", "delete", "pdf"])
    assert deleted.exit_code == 0
    assert cli_runner.invoke(cli, ["skills", "delete", "pdf"]).exit_code == 1


def test_skills_sync(cli_runner, paths: AutomaticPaths, write_skill) -> None:
    write_skill("pdf")

    result = cli_runner.invoke(cli, ["skills", "sync"])

    assert result.exit_code == 0, result.output
    assert (paths.claude_skills_dir / "pdf" / "SKILL.md").is_file()
    again = cli_runner.invoke(cli, ["skills", "sync", "pdf"])
    assert "Nothing to do." in again.output


def test_skills_import_local(cli_runner, paths: AutomaticPaths, project_dir: Path, write_skill) -> None:
    write_skill("mine", root=project_dir / "skills")
    cli_runner.invoke(cli, ["projects", "create", "demo", "--dir", str(project_dir), "--agent", "claude"])
    project = ProjectRepository(paths).read("demo")
    project.local_skills = ["mine"]
    ProjectRepository(paths).save(project)

    result = cli_runner.invoke(cli, ["skills", "import-local", "demo", "mine"])

    assert result.exit_code == 0, result.output
    assert (paths.agents_skills_dir / "mine" / "SKILL.md").is_file()
    assert ProjectRepository(paths).read("demo").skills == ["mine"]


def test_skills_fetch_uses_installer(cli_runner, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[tuple[str, str]] = []

    def fake_install(store, source: str, name: str) -> Path:
        calls.append((source, name))
        return store.save_skill(name, f"---\nname: {name}\n---\nbody\n")

    monkeypatch.setattr(cli_module, "install_remote_skill", fake_install)

    result = cli_runner.invoke(cli, ["skills", "fetch", "acme/skills", "pdf"])

    assert result.exit_code == 0, result.output
    assert calls == [("acme/skills", "pdf")]
    assert "Skill saved" in result.output


def test_skills_fetch_failure(cli_runner, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(store, source: str, name: str) -> Path:
        raise RemoteFetchError("nothing there")

    monkeypatch.setattr(cli_module, "install_remote_skill", failing)

    result = cli_runner.invoke(cli, ["skills", "fetch", "acme/skills", "pdf"])
    assert result.exit_code == 1
    assert "nothing there" in result.output
