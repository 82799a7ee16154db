import json
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

import pytest

from automatic.agents.codex.config_repository import CodexConfigRepository, strip_mcp_sections
from automatic.agents.common.repositories import JsonConfigRepository
from automatic.agents.opencode.config_repository import OpenCodeConfigRepository
from automatic.errors import MalformedDataError


def test_owned_file_is_replaced_wholesale(tmp_path: Path, write_json) -> None:
    repo = JsonConfigRepository(".cursor/mcp.json")
    write_json(tmp_path / ".cursor" / "mcp.json", {"mcpServers": {"old": {}}, "other": 1})

    path = repo.save_mcp_payload(tmp_path, {"new": {"command": "x"}})

    assert json.loads(path.read_text(encoding="utf-8")) == {"mcpServers": {"new": {"command": "x"}}}


def test_shared_file_keeps_unrelated_keys(tmp_path: Path, write_json) -> None:
    repo = JsonConfigRepository(".gemini/settings.json", shared=True)
    write_json(
        tmp_path / ".gemini" / "settings.json",
        {"theme": "dark", "mcpServers": {"old": {"command": "y"}}},
    )

    path = repo.save_mcp_payload(tmp_path, {"new": {"command": "x"}})

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "theme": "dark",
        "mcpServers": {"new": {"command": "x"}},
    }


def test_shared_file_that_is_not_an_object_is_rejected(tmp_path: Path) -> None:
    repo = JsonConfigRepository(".gemini/settings.json", shared=True)
    path = tmp_path / ".gemini" / "settings.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(MalformedDataError):
        repo.save_mcp_payload(tmp_path, {})


def test_owned_file_removal_prunes_empty_parents(tmp_path: Path, write_json) -> None:
    repo = JsonConfigRepository(".kiro/settings/mcp.json")
    write_json(tmp_path / ".kiro" / "settings" / "mcp.json", {"mcpServers": {}})

    removed = repo.remove_mcp_payload(tmp_path)

    assert removed == [tmp_path / ".kiro" / "settings" / "mcp.json"]
    assert not (tmp_path / ".kiro").exists()
    assert tmp_path.exists()


def test_shared_file_removal_strips_only_the_managed_key(tmp_path: Path, write_json) -> None:
    repo = JsonConfigRepository(".vscode/mcp.json", root_key="servers", shared=True)
    path = tmp_path / ".vscode" / "mcp.json"
    write_json(path, {"inputs": [], "servers": {"a": {"command": "x"}}})

    preview = repo.remove_mcp_payload(tmp_path, dry_run=True)
    assert preview == [path]
    assert "servers" in json.loads(path.read_text(encoding="utf-8"))

    repo.remove_mcp_payload(tmp_path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"inputs": []}


def test_opencode_seeds_schema_and_removes_boilerplate_only_file(tmp_path: Path) -> None:
    repo = OpenCodeConfigRepository()

    path = repo.save_mcp_payload(tmp_path, {"a": {"type": "local", "command": ["x"]}})
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["$schema"] == "https://opencode.ai/config.json"
    assert payload["mcp"] == {"a": {"type": "local", "command": ["x"]}}

    assert repo.remove_mcp_payload(tmp_path) == [path]
    assert not path.exists()


def test_opencode_discovery_includes_legacy_file(tmp_path: Path) -> None:
    repo = OpenCodeConfigRepository()

    assert repo.discovery_paths(tmp_path) == [
        tmp_path / "opencode.json",
        tmp_path / ".opencode.json",
    ]


def test_codex_merge_preserves_other_tables(tmp_path: Path) -> None:
    repo = CodexConfigRepository()
    path = tmp_path / ".codex" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(
        'model = "o3"\n\n[mcp_servers.old]\ncommand = "old"\n\n[profiles.fast]\nmodel = "mini"\n',
        encoding="utf-8",
    )

    repo.save_mcp_payload(
        tmp_path,
        {"new server": {"command": "npx", "args": ["-y"], "env": {"A": "1"}}},
    )

    parsed = tomllib.loads(path.read_text(encoding="utf-8"))
    assert parsed["model"] == "o3"
    assert parsed["profiles"] == {"fast": {"model": "mini"}}
    assert parsed["mcp_servers"] == {
        "new server": {"command": "npx", "args": ["-y"], "env": {"A": "1"}}
    }


def test_codex_removal_keeps_other_settings(tmp_path: Path) -> None:
    repo = CodexConfigRepository()
    repo.save_mcp_payload(tmp_path, {"a": {"command": "x"}})
    path = tmp_path / ".codex" / "config.toml"
    path.write_text('model = "o3"\n\n' + path.read_text(encoding="utf-8"), encoding="utf-8")

    assert repo.remove_mcp_payload(tmp_path) == [path]

    assert tomllib.loads(path.read_text(encoding="utf-8")) == {"model": "o3"}


def test_codex_removal_deletes_file_with_only_servers(tmp_path: Path) -> None:
    repo = CodexConfigRepository()
    repo.save_mcp_payload(tmp_path, {"a": {"command": "x"}})

    repo.remove_mcp_payload(tmp_path)

    assert not (tmp_path / ".codex").exists()


def test_strip_mcp_sections_handles_nested_tables() -> None:
    text = '[mcp_servers.a]\ncommand = "x"\n\n[mcp_servers.a.env]\nA = "1"\n\n[other]\nkey = 1\n'

    assert strip_mcp_sections(text) == "[other]\nkey = 1"
