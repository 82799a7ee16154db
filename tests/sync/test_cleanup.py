from pathlib import Path

import pytest

from automatic.errors import UnknownAgentIdError
from automatic.sync.cleanup import CleanupManager
from automatic.sync.engine import SyncEngine


def _setup(engine: SyncEngine, make_project, write_skill, agents: list[str]):
    write_skill("a")
    return engine.sync_without_autodetect(make_project(agents=agents, skills=["a"])).project


def test_shared_skill_dir_survives_when_still_needed(
    engine: SyncEngine, make_project, write_skill, project_dir: Path
) -> None:
    project = _setup(engine, make_project, write_skill, ["cursor", "copilot"])

    result = CleanupManager(engine).remove_agent(project, "cursor")

    assert result.removed == [project_dir / ".cursor" / "mcp.json"]
    assert not (project_dir / ".cursor").exists()
    assert (project_dir / ".agents" / "skills" / "a" / "SKILL.md").is_file()
    assert (project_dir / ".vscode" / "mcp.json").is_file()
    assert result.project.agents == ["copilot"]
    assert engine.projects.read("demo").agents == ["copilot"]
    assert result.sync is not None and result.sync.ok


def test_exclusive_paths_are_removed(
    engine: SyncEngine, make_project, write_skill, project_dir: Path
) -> None:
    project = _setup(engine, make_project, write_skill, ["claude", "cursor"])

    result = CleanupManager(engine).remove_agent(project, "claude")

    assert not (project_dir / ".mcp.json").exists()
    assert not (project_dir / ".claude").exists()
    assert (project_dir / ".agents" / "skills" / "a" / "SKILL.md").is_file()
    assert (project_dir / ".cursor" / "mcp.json").is_file()
    assert result.agent_id == "claude"


def test_remaining_agents_are_rerendered(
    engine: SyncEngine, make_project, write_skill, project_dir: Path
) -> None:
    project = _setup(engine, make_project, write_skill, ["claude", "cursor"])

    CleanupManager(engine).remove_agent(project, "cursor")

    assert not (project_dir / ".cursor").exists()
    assert (project_dir / ".claude" / "skills" / "a" / "SKILL.md").is_file()
    assert (project_dir / ".mcp.json").is_file()


def test_preview_matches_removal_and_changes_nothing(
    engine: SyncEngine, make_project, write_skill, project_dir: Path
) -> None:
    project = _setup(engine, make_project, write_skill, ["claude", "cursor"])
    manager = CleanupManager(engine)

    preview = manager.preview_remove_agent(project, "claude")

    assert (project_dir / ".mcp.json").is_file()
    assert (project_dir / ".claude" / "skills").is_dir()
    assert engine.projects.read("demo").agents == ["claude", "cursor"]
    assert manager.remove_agent(project, "claude").removed == preview


def test_unknown_agent(engine: SyncEngine, make_project) -> None:
    with pytest.raises(UnknownAgentIdError):
        CleanupManager(engine).preview_remove_agent(make_project(agents=["claude"]), "vim")


def test_removing_last_agent_drops_project_hub(
    engine: SyncEngine, make_project, write_skill, project_dir: Path
) -> None:
    project = _setup(engine, make_project, write_skill, ["claude"])
    hub = project_dir / ".agents" / "skills"
    assert (hub / "a" / "SKILL.md").is_file()

    manager = CleanupManager(engine)
    preview = manager.preview_remove_agent(project, "claude")
    assert hub in preview
    assert hub.is_dir()

    result = manager.remove_agent(project, "claude")

    assert result.removed == preview
    assert hub in result.removed
    assert not (project_dir / ".mcp.json").exists()
    assert not (project_dir / ".claude" / "skills").exists()
    assert not (project_dir / ".agents").exists()
    assert result.project.agents == []
