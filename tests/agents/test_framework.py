import json
import logging
from pathlib import Path

import pytest

from automatic.agents import AgentCapability, AgentId, all_agents, create_registered_agent, list_registered_agents
from automatic.agents.common.models import MCPServerDTO, MCPTransport
from automatic.errors import UnknownAgentIdError


def test_registry_lists_every_variant_in_order() -> None:
    assert [agent_id.value for agent_id in list_registered_agents()] == [
        "claude",
        "cursor",
        "copilot",
        "kilo",
        "junie",
        "cline",
        "kiro",
        "gemini",
        "antigravity",
        "droid",
        "goose",
        "codex",
        "opencode",
        "warp",
    ]
    assert len(all_agents()) == 14


def test_unknown_agent_id_raises() -> None:
    with pytest.raises(UnknownAgentIdError):
        create_registered_agent("notepad")


@pytest.mark.parametrize(
    ("agent_id", "marker", "is_dir"),
    [
        ("claude", ".mcp.json", False),
        ("claude", ".claude/skills", True),
        ("cursor", ".cursorrules", False),
        ("cursor", ".cursor/rules", True),
        ("copilot", ".github/copilot-instructions.md", False),
        ("kilo", ".kilocode", True),
        ("junie", ".junie", True),
        ("cline", ".clinerules", False),
        ("kiro", ".kiro", True),
        ("gemini", "GEMINI.md", False),
        ("antigravity", ".antigravity", True),
        ("droid", ".factory/mcp.json", False),
        ("goose", ".goosehints", False),
        ("codex", ".codex/config.toml", False),
        ("opencode", ".opencode.json", False),
        ("warp", "WARP.md", False),
    ],
)
def test_detect_on_marker(tmp_path: Path, agent_id: str, marker: str, is_dir: bool) -> None:
    agent = create_registered_agent(agent_id)
    assert agent.detect(tmp_path) is False

    target = tmp_path / marker
    if is_dir:
        target.mkdir(parents=True)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("", encoding="utf-8")

    assert agent.detect(tmp_path) is True


def test_skill_dirs_per_variant(tmp_path: Path) -> None:
    assert create_registered_agent("claude").skill_dirs(tmp_path) == [tmp_path / ".claude" / "skills"]
    assert create_registered_agent("junie").skill_dirs(tmp_path) == [
        tmp_path / ".junie" / "skills",
        tmp_path / ".agents" / "skills",
    ]
    assert create_registered_agent("cursor").skill_dirs(tmp_path) == [tmp_path / ".agents" / "skills"]


def test_discovery_skips_self_server_and_unsafe_names(tmp_path: Path, write_json) -> None:
    write_json(
        tmp_path / ".mcp.json",
        {
            "mcpServers": {
                "automatic": {"command": "automatic", "args": ["mcp-serve"]},
                "../escape": {"command": "x"},
                "github": {"command": "npx", "args": ["mcp-github"]},
            }
        },
    )

    discovered = create_registered_agent("claude").discover_mcp_servers(tmp_path)

    assert list(discovered) == ["github"]


def test_discovery_of_absent_file_is_empty(tmp_path: Path) -> None:
    assert create_registered_agent("cursor").discover_mcp_servers(tmp_path) == {}


def test_discovery_of_corrupt_file_is_empty_and_logged(tmp_path: Path, caplog) -> None:
    path = tmp_path / ".cursor" / "mcp.json"
    path.parent.mkdir(parents=True)
    path.write_text("{broken", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="automatic"):
        discovered = create_registered_agent("cursor").discover_mcp_servers(tmp_path)

    assert discovered == {}
    assert "Cursor" in caplog.text


def test_opencode_primary_file_wins_over_legacy(tmp_path: Path, write_json) -> None:
    write_json(tmp_path / "opencode.json", {"mcp": {"a": {"type": "local", "command": ["new"]}}})
    write_json(
        tmp_path / ".opencode.json",
        {"mcp": {"a": {"type": "local", "command": ["old"]}, "b": {"type": "remote", "url": "u"}}},
    )

    discovered = create_registered_agent("opencode").discover_mcp_servers(tmp_path)

    assert discovered["a"].command == "new"
    assert discovered["b"].transport == MCPTransport.HTTP


def test_warp_has_no_mcp_surface(tmp_path: Path) -> None:
    warp = create_registered_agent("warp")
    server = MCPServerDTO(name="x", transport=MCPTransport.STDIO, command="x")

    assert warp.write_mcp_config(tmp_path, {"x": server}) is None
    assert warp.discover_mcp_servers(tmp_path) == {}
    assert warp.mcp_note
    assert AgentCapability.MCP_CONFIG not in warp.capabilities
    assert list(tmp_path.iterdir()) == []


def test_sync_skills_removes_stale_and_keeps_local(tmp_path: Path) -> None:
    agent = create_registered_agent("claude")
    skills_dir = tmp_path / ".claude" / "skills"
    for name in ("old", "mine"):
        (skills_dir / name).mkdir(parents=True)
        (skills_dir / name / "SKILL.md").write_text(name, encoding="utf-8")
    (skills_dir / "notes.txt").write_text("not a skill dir", encoding="utf-8")

    written = agent.sync_skills(tmp_path, [("fresh", "# fresh\n")], ["fresh"], ["mine"])

    assert written == [skills_dir / "fresh" / "SKILL.md"]
    assert not (skills_dir / "old").exists()
    assert (skills_dir / "mine" / "SKILL.md").read_text(encoding="utf-8") == "mine"
    assert (skills_dir / "notes.txt").exists()
    assert (skills_dir / "fresh" / "SKILL.md").read_text(encoding="utf-8") == "# fresh\n"


def test_cleanup_keeps_paths_used_by_remaining_agents(tmp_path: Path) -> None:
    server = {"x": MCPServerDTO(name="x", transport=MCPTransport.STDIO, command="x")}
    cursor = create_registered_agent("cursor")
    cursor.write_mcp_config(tmp_path, server)
    cursor.sync_skills(tmp_path, [("a", "a")], ["a"], [])

    removed = cursor.cleanup(tmp_path, ["gemini"])

    assert removed == [tmp_path / ".cursor" / "mcp.json"]
    assert (tmp_path / ".agents" / "skills" / "a" / "SKILL.md").exists()


def test_cleanup_removes_hub_and_empty_parent_when_unused(tmp_path: Path) -> None:
    cursor = create_registered_agent("cursor")
    cursor.sync_skills(tmp_path, [("a", "a")], ["a"], [])

    preview = cursor.preview_cleanup(tmp_path, ["claude"])
    assert preview == [tmp_path / ".agents" / "skills"]
    assert (tmp_path / ".agents" / "skills").exists()

    assert cursor.cleanup(tmp_path, ["claude"]) == preview
    assert not (tmp_path / ".agents").exists()


def test_cleanup_of_directory_owning_agent_removes_its_directory(tmp_path: Path) -> None:
    kiro = create_registered_agent("kiro")
    kiro.write_mcp_config(tmp_path, {})
    (tmp_path / ".kiro" / "steering").mkdir()

    removed = kiro.cleanup(tmp_path, [])

    assert tmp_path / ".kiro" in removed
    assert not (tmp_path / ".kiro").exists()


def test_cleanup_of_shared_settings_strips_only_servers(tmp_path: Path, write_json) -> None:
    path = tmp_path / ".gemini" / "settings.json"
    write_json(path, {"theme": "dark", "mcpServers": {"a": {"command": "x"}}})

    removed = create_registered_agent("gemini").cleanup(tmp_path, ["cursor"])

    assert removed == [path]
    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_metadata_labels() -> None:
    assert create_registered_agent(AgentId.CODEX).label == "Codex CLI"
    assert create_registered_agent("copilot").project_file_name == ".github/copilot-instructions.md"
