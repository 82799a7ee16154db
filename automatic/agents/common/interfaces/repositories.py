from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class IAgentConfigRepository(ABC):
    """Native MCP config storage for one agent, rooted at a project directory."""

    @abstractmethod
    def config_path(self, directory: Path) -> Path:
        raise NotImplementedError

    def discovery_paths(self, directory: Path) -> list[Path]:
        return [self.config_path(directory)]

    @abstractmethod
    def load_mcp_payload(self, path: Path) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def save_mcp_payload(self, directory: Path, payload: dict[str, Any]) -> Path:
        raise NotImplementedError

    @abstractmethod
    def remove_mcp_payload(self, directory: Path, dry_run: bool = False) -> list[Path]:
        raise NotImplementedError
