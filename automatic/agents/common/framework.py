import logging
from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, cast

from automatic.agents.agent_id import (
    AgentCapability,
    AgentId,
    AgentMetadata,
    agent_metadata,
    parse_agent_id,
)
from automatic.agents.common.interfaces.agent import IAgent
from automatic.agents.common.interfaces.mapper import IAgentMCPMapper
from automatic.agents.common.interfaces.repositories import IAgentConfigRepository
from automatic.agents.common.models import MCPServerDTO
from automatic.agents.common.skills import sync_skill_dirs
from automatic.constants import HUB_SKILLS_RELATIVE, SELF_SERVER_NAME
from automatic.errors import AutomaticFileError, UnknownAgentIdError
from automatic.filesystem import path_present, remove_dir_if_empty, remove_path
from automatic.utils import is_under, is_valid_name

logger = logging.getLogger(__name__)


class AgentRegistryMeta(ABCMeta):
    _registry: dict[AgentId, type["RegisteredAgent"]] = {}

    def __new__(
        mcls,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        **kwargs: Any,
    ):
        cls = super().__new__(mcls, name, bases, namespace, **kwargs)
        agent_id = getattr(cls, "AGENT_ID", None)
        is_abstract = bool(getattr(cls, "__abstractmethods__", False))
        if agent_id is not None and not is_abstract:
            mcls._registry[agent_id] = cast(type["RegisteredAgent"], cls)  # type: ignore[assignment]
        return cls


class RegisteredAgent(IAgent, metaclass=AgentRegistryMeta):
    """Default agent behaviour driven by the catalog entry of ``AGENT_ID``.

    Subclasses supply a config repository and a mapper; everything else
    (detection, skill directories, discovery filtering, cleanup) is shared.
    """

    AGENT_ID: ClassVar[AgentId | None] = None

    def __init__(
        self,
        repository: IAgentConfigRepository | None,
        mapper: IAgentMCPMapper | None,
    ) -> None:
        self._repository = repository
        self._mapper = mapper

    @classmethod
    @abstractmethod
    def create_default(cls) -> "RegisteredAgent":
        raise NotImplementedError

    @classmethod
    def default_config_file(cls) -> str:
        if cls.AGENT_ID is None:
            raise NotImplementedError("AGENT_ID is not set")
        config_file = agent_metadata(cls.AGENT_ID).config_file
        if config_file is None:
            raise NotImplementedError(f"{cls.AGENT_ID.value} has no MCP config file")
        return config_file

    @property
    def metadata(self) -> AgentMetadata:
        if self.AGENT_ID is None:
            raise NotImplementedError("AGENT_ID is not set")
        return agent_metadata(self.AGENT_ID)

    @property
    def agent_id(self) -> AgentId:
        return self.metadata.agent_id

    @property
    def label(self) -> str:
        return self.metadata.label

    @property
    def project_file_name(self) -> str:
        return self.metadata.project_file_name

    @property
    def capabilities(self) -> frozenset[AgentCapability]:
        return self.metadata.capabilities

    @property
    def mcp_note(self) -> str | None:
        return self.metadata.mcp_note

    @property
    def repository(self) -> IAgentConfigRepository | None:
        return self._repository

    @property
    def mapper(self) -> IAgentMCPMapper | None:
        return self._mapper

    def config_description(self) -> str:
        if self.metadata.config_file is None:
            return "No project MCP config (see note)"
        return self.metadata.config_file

    def detect(self, directory: Path) -> bool:
        return any(path_present(directory / marker) for marker in self.metadata.detect_markers)

    def skill_dirs(self, directory: Path) -> list[Path]:
        return [directory / item for item in self.metadata.skill_dirs]

    def owned_dir(self, directory: Path) -> Path | None:
        if self.metadata.owned_dir is None:
            return None
        return directory / self.metadata.owned_dir

    def config_paths(self, directory: Path) -> list[Path]:
        if self._repository is None:
            return []
        return self._repository.discovery_paths(directory)

    def write_mcp_config(
        self, directory: Path, servers: dict[str, MCPServerDTO]
    ) -> Path | None:
        if self._repository is None or self._mapper is None:
            return None
        payload = self._mapper.from_common(servers)
        return self._repository.save_mcp_payload(directory, payload)

    def discover_mcp_servers(self, directory: Path) -> dict[str, MCPServerDTO]:
        if self._repository is None or self._mapper is None:
            return {}
        discovered: dict[str, MCPServerDTO] = {}
        for path in self._repository.discovery_paths(directory):
            if not path.is_file():
                continue
            try:
                payload = self._repository.load_mcp_payload(path)
            except AutomaticFileError as exc:
                logger.warning("Ignoring unreadable %s config: %s", self.label, exc)
                continue
            for name, server in self._mapper.to_common(payload).items():
                if name == SELF_SERVER_NAME or not is_valid_name(name):
                    continue
                discovered.setdefault(name, server)
        return discovered

    def sync_skills(
        self,
        directory: Path,
        contents: list[tuple[str, str]],
        selected: list[str],
        local: list[str],
    ) -> list[Path]:
        try:
            return sync_skill_dirs(self.skill_dirs(directory), contents, selected, local)
        except OSError as exc:
            raise AutomaticFileError(directory, f"Failed to sync {self.label} skills ({exc})") from exc

    def cleanup(self, directory: Path, remaining: list[str]) -> list[Path]:
        return self._cleanup(directory, remaining, dry_run=False)

    def preview_cleanup(self, directory: Path, remaining: list[str]) -> list[Path]:
        return self._cleanup(directory, remaining, dry_run=True)

    def _cleanup(self, directory: Path, remaining: list[str], dry_run: bool) -> list[Path]:
        protected = _paths_used_by(directory, remaining, exclude=self.agent_id)
        removed: list[Path] = []

        owned = self.owned_dir(directory)
        owned_removed = False
        if owned is not None and path_present(owned):
            if not any(is_under(path, owned) for path in protected):
                if not dry_run:
                    remove_path(owned)
                removed.append(owned)
                owned_removed = True

        if not owned_removed and self._repository is not None:
            config_path = self._repository.config_path(directory)
            if config_path not in protected:
                removed.extend(self._repository.remove_mcp_payload(directory, dry_run=dry_run))

        for skill_dir in self.skill_dirs(directory):
            if skill_dir in protected or not path_present(skill_dir):
                continue
            if owned_removed and owned is not None and is_under(skill_dir, owned):
                continue
            if not dry_run:
                remove_path(skill_dir)
                remove_dir_if_empty(skill_dir.parent)
            removed.append(skill_dir)

        hub = directory.joinpath(*HUB_SKILLS_RELATIVE)
        if hub not in protected and hub not in removed and path_present(hub):
            if not dry_run:
                remove_path(hub)
                remove_dir_if_empty(hub.parent)
            removed.append(hub)
        return removed


def _paths_used_by(directory: Path, agent_ids: list[str], exclude: AgentId) -> set[Path]:
    used: set[Path] = set()
    for raw in agent_ids:
        agent_id = parse_agent_id(raw)
        if agent_id is None or agent_id == exclude:
            continue
        metadata = agent_metadata(agent_id)
        used.update(directory / item for item in metadata.skill_dirs)
        if metadata.config_file is not None:
            used.add(directory / metadata.config_file)
        if metadata.owned_dir is not None:
            used.add(directory / metadata.owned_dir)
    return used


def list_registered_agents() -> list[AgentId]:
    _load_registered_modules()
    registered = AgentRegistryMeta._registry
    return [agent_id for agent_id in AgentId if agent_id in registered]


def create_registered_agent(agent: AgentId | str) -> RegisteredAgent:
    _load_registered_modules()
    agent_id = parse_agent_id(agent)
    agent_class = AgentRegistryMeta._registry.get(agent_id) if agent_id else None
    if agent_class is None:
        raise UnknownAgentIdError(str(getattr(agent, "value", agent)))
    return agent_class.create_default()


def all_agents() -> list[RegisteredAgent]:
    return [create_registered_agent(agent_id) for agent_id in list_registered_agents()]


def _load_registered_modules() -> None:
    from automatic.agents.common.loader import load_agent_modules

    load_agent_modules()
