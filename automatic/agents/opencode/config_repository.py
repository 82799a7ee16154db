from pathlib import Path
from typing import Any

from automatic.agents.common.repositories import JsonConfigRepository
from automatic.utils import write_json

OPENCODE_SCHEMA_URL = "https://opencode.ai/config.json"


class OpenCodeConfigRepository(JsonConfigRepository):
    """Project ``opencode.json``; ``.opencode.json`` is read for discovery only."""

    def __init__(self, relative_path: str = "opencode.json") -> None:
        super().__init__(
            relative_path,
            root_key="mcp",
            shared=True,
            legacy_paths=(".opencode.json",),
            boilerplate_keys=("$schema",),
        )

    def save_mcp_payload(self, directory: Path, payload: dict[str, Any]) -> Path:
        path = self.config_path(directory)
        config = self.load_config(path)
        if not config:
            config["$schema"] = OPENCODE_SCHEMA_URL
        config[self.root_key] = payload
        write_json(path, config)
        return path
