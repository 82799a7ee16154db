import re
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from automatic.agents.common.interfaces.repositories import IAgentConfigRepository
from automatic.errors import InvalidConfigSchemaError, MalformedDataError
from automatic.filesystem import remove_dir_if_empty, remove_path
from automatic.utils import write_text

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_HEADER_RE = re.compile(r"^\s*\[\[?\s*([^\]]+?)\s*\]\]?\s*(?:#.*)?$")
MCP_SECTION = "mcp_servers"


def _dump_toml_key(key: str) -> str:
    if _BARE_KEY_RE.match(key):
        return key
    return _dump_toml_value(key)


def _dump_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(value)
    if isinstance(value, list):
        return "[" + ", ".join(_dump_toml_value(item) for item in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(
            f"{_dump_toml_key(str(k))} = {_dump_toml_value(v)}" for k, v in value.items()
        )
        return "{ " + items + " }" if items else "{}"
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _dump_table(lines: list[str], table_name: str, values: dict[str, Any]) -> None:
    if not values:
        return
    lines.append(f"[{table_name}]")
    for key in sorted(values):
        lines.append(f"{_dump_toml_key(str(key))} = {_dump_toml_value(values[key])}")
    lines.append("")


def serialize_mcp_servers(payload: dict[str, Any]) -> str:
    lines: list[str] = []
    for name, server in payload.items():
        if not isinstance(server, dict):
            continue
        table = f"{MCP_SECTION}.{_dump_toml_key(name)}"
        lines.append(f"[{table}]")
        nested: list[tuple[str, dict[str, Any]]] = []
        for key, value in server.items():
            if isinstance(value, dict):
                nested.append((key, value))
                continue
            lines.append(f"{_dump_toml_key(key)} = {_dump_toml_value(value)}")
        lines.append("")
        for key, value in nested:
            _dump_table(lines, f"{table}.{_dump_toml_key(key)}", value)
    return "\n".join(lines).strip() + "\n" if lines else ""


def strip_mcp_sections(text: str) -> str:
    """Drop every ``[mcp_servers...]`` table, keeping all other TOML text."""
    kept: list[str] = []
    skipping = False
    for line in text.splitlines():
        match = _HEADER_RE.match(line)
        if match:
            header = match.group(1).strip()
            skipping = header == MCP_SECTION or header.startswith(f"{MCP_SECTION}.")
        if not skipping:
            kept.append(line)
    return "\n".join(kept).strip()


class CodexConfigRepository(IAgentConfigRepository):
    def __init__(self, relative_path: str = ".codex/config.toml") -> None:
        self.relative_path = relative_path

    def config_path(self, directory: Path) -> Path:
        return directory / self.relative_path

    def load_config(self, path: Path) -> dict[str, Any]:
        if not path.exists() or path.stat().st_size == 0:
            return {}
        try:
            payload = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            raise MalformedDataError(path, str(exc)) from exc
        if not isinstance(payload, dict):
            raise InvalidConfigSchemaError(path, "must be a TOML table")
        return payload

    def load_mcp_payload(self, path: Path) -> dict[str, Any]:
        servers = self.load_config(path).get(MCP_SECTION)
        return servers if isinstance(servers, dict) else {}

    def save_mcp_payload(self, directory: Path, payload: dict[str, Any]) -> Path:
        path = self.config_path(directory)
        preserved = strip_mcp_sections(self._read_text(path))
        rendered = serialize_mcp_servers(payload)
        if preserved and rendered:
            content = f"{preserved}\n\n{rendered}"
        else:
            content = rendered or f"{preserved}\n"
        write_text(path, content)
        return path

    def remove_mcp_payload(self, directory: Path, dry_run: bool = False) -> list[Path]:
        path = self.config_path(directory)
        if not path.is_file():
            return []
        text = self._read_text(path)
        preserved = strip_mcp_sections(text)
        if preserved == text.strip():
            return []
        if not dry_run:
            if preserved:
                write_text(path, f"{preserved}\n")
            else:
                remove_path(path)
                remove_dir_if_empty(path.parent)
        return [path]

    @staticmethod
    def _read_text(path: Path) -> str:
        if not path.is_file():
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MalformedDataError(path, str(exc)) from exc
