"""Global, name-keyed store of canonical MCP server configs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from automatic.agents.common.models import MCPServerDTO
from automatic.agents.common.utils import server_from_canonical, server_to_canonical
from automatic.config import AutomaticPaths
from automatic.errors import InvalidConfigSchemaError, MalformedDataError, NotFoundError
from automatic.filesystem import remove_path
from automatic.registry.schema import first_schema_error
from automatic.utils import ensure_valid_name, is_valid_name, read_json_safe, write_json

logger = logging.getLogger(__name__)


class MCPServerRegistry:
    def __init__(self, paths: AutomaticPaths) -> None:
        self._root = paths.mcp_servers_dir

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path:
        return self._root / f"{name}.json"

    def list_names(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            child.stem
            for child in self._root.iterdir()
            if child.is_file() and child.suffix == ".json" and is_valid_name(child.stem)
        )

    def exists(self, name: str) -> bool:
        return is_valid_name(name) and self._path(name).is_file()

    def read_raw(self, name: str) -> dict[str, Any]:
        ensure_valid_name(name, "MCP server")
        path = self._path(name)
        payload, error = read_json_safe(path)
        if error is not None:
            raise MalformedDataError(path, error)
        if payload is None:
            raise NotFoundError("MCP server", name)
        if not isinstance(payload, dict):
            raise InvalidConfigSchemaError(path, "must be a JSON object")
        return payload

    def read(self, name: str) -> MCPServerDTO:
        payload = self.read_raw(name)
        try:
            return server_from_canonical(name, payload)
        except ValueError as exc:
            raise InvalidConfigSchemaError(self._path(name), str(exc)) from exc

    def load_many(self, names: list[str]) -> dict[str, MCPServerDTO]:
        """Servers for every known name; missing or broken entries are skipped."""
        servers: dict[str, MCPServerDTO] = {}
        for name in names:
            try:
                servers[name] = self.read(name)
            except NotFoundError:
                logger.warning("MCP server '%s' is not in the registry", name)
            except (InvalidConfigSchemaError, MalformedDataError) as exc:
                logger.warning("Skipping MCP server '%s': %s", name, exc)
        return servers

    def list_servers(self) -> dict[str, MCPServerDTO]:
        return self.load_many(self.list_names())

    def save_raw(self, name: str, payload: Any) -> Path:
        ensure_valid_name(name, "MCP server")
        path = self._path(name)
        if not isinstance(payload, dict):
            raise InvalidConfigSchemaError(path, "must be a JSON object")
        error = first_schema_error(payload)
        if error is not None:
            raise InvalidConfigSchemaError(path, error)
        write_json(path, payload)
        return path

    def save(self, server: MCPServerDTO) -> Path:
        return self.save_raw(server.name, server_to_canonical(server))

    def delete(self, name: str) -> bool:
        ensure_valid_name(name, "MCP server")
        path = self._path(name)
        if not path.exists():
            return False
        remove_path(path)
        return True
