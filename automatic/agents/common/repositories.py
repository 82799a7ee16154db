import logging
from pathlib import Path
from typing import Any

from automatic.agents.common.interfaces.repositories import IAgentConfigRepository
from automatic.errors import InvalidConfigSchemaError, MalformedDataError
from automatic.filesystem import remove_dir_if_empty, remove_path
from automatic.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)


class JsonConfigRepository(IAgentConfigRepository):
    """MCP servers stored under one top-level key of a JSON file.

    With ``shared=True`` the file belongs to the tool and holds unrelated
    settings: writes replace only ``root_key`` and cleanup strips it.
    """

    def __init__(
        self,
        relative_path: str,
        root_key: str = "mcpServers",
        shared: bool = False,
        legacy_paths: tuple[str, ...] = (),
        boilerplate_keys: tuple[str, ...] = (),
    ) -> None:
        self.relative_path = relative_path
        self.root_key = root_key
        self.shared = shared
        self.legacy_paths = legacy_paths
        self.boilerplate_keys = boilerplate_keys

    def config_path(self, directory: Path) -> Path:
        return directory / self.relative_path

    def discovery_paths(self, directory: Path) -> list[Path]:
        return [self.config_path(directory)] + [
            directory / item for item in self.legacy_paths
        ]

    def load_config(self, path: Path) -> dict[str, Any]:
        payload, error = read_json_safe(path)
        if error is not None:
            raise MalformedDataError(path, error)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise InvalidConfigSchemaError(path, "must be a JSON object")
        return payload

    def load_mcp_payload(self, path: Path) -> dict[str, Any]:
        servers = self.load_config(path).get(self.root_key)
        return servers if isinstance(servers, dict) else {}

    def save_mcp_payload(self, directory: Path, payload: dict[str, Any]) -> Path:
        path = self.config_path(directory)
        config: dict[str, Any] = {}
        if self.shared:
            config = self.load_config(path)
        config[self.root_key] = payload
        write_json(path, config)
        return path

    def remove_mcp_payload(self, directory: Path, dry_run: bool = False) -> list[Path]:
        path = self.config_path(directory)
        if not path.is_file():
            return []
        if not self.shared:
            if not dry_run:
                remove_path(path)
                self._prune_parents(path, directory)
            return [path]

        try:
            config = self.load_config(path)
        except (MalformedDataError, InvalidConfigSchemaError) as exc:
            logger.warning("Leaving %s untouched: %s", path, exc)
            return []
        if self.root_key not in config:
            return []
        if not dry_run:
            config.pop(self.root_key)
            if set(config) - set(self.boilerplate_keys):
                write_json(path, config)
            else:
                remove_path(path)
                self._prune_parents(path, directory)
        return [path]

    @staticmethod
    def _prune_parents(path: Path, directory: Path) -> None:
        parent = path.parent
        while parent != directory and parent.is_relative_to(directory):
            if not remove_dir_if_empty(parent):
                return
            parent = parent.parent
