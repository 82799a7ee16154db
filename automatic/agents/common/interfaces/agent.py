from abc import ABC, abstractmethod
from pathlib import Path

from automatic.agents.agent_id import AgentCapability, AgentId
from automatic.agents.common.models import MCPServerDTO


class IAgent(ABC):
    @property
    @abstractmethod
    def agent_id(self) -> AgentId:
        raise NotImplementedError

    @property
    @abstractmethod
    def label(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def project_file_name(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def capabilities(self) -> frozenset[AgentCapability]:
        raise NotImplementedError

    @property
    def mcp_note(self) -> str | None:
        return None

    @abstractmethod
    def config_description(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def detect(self, directory: Path) -> bool:
        raise NotImplementedError

    @abstractmethod
    def skill_dirs(self, directory: Path) -> list[Path]:
        raise NotImplementedError

    @abstractmethod
    def config_paths(self, directory: Path) -> list[Path]:
        raise NotImplementedError

    @abstractmethod
    def write_mcp_config(
        self, directory: Path, servers: dict[str, MCPServerDTO]
    ) -> Path | None:
        raise NotImplementedError

    @abstractmethod
    def discover_mcp_servers(self, directory: Path) -> dict[str, MCPServerDTO]:
        raise NotImplementedError

    @abstractmethod
    def sync_skills(
        self,
        directory: Path,
        contents: list[tuple[str, str]],
        selected: list[str],
        local: list[str],
    ) -> list[Path]:
        raise NotImplementedError

    @abstractmethod
    def cleanup(self, directory: Path, remaining: list[str]) -> list[Path]:
        raise NotImplementedError

    @abstractmethod
    def preview_cleanup(self, directory: Path, remaining: list[str]) -> list[Path]:
        raise NotImplementedError
