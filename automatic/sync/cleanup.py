import logging
from pathlib import Path

from automatic.agents.agent_id import parse_agent_id
from automatic.agents.common.framework import RegisteredAgent, create_registered_agent
from automatic.models import CleanupResult, Project
from automatic.sync.engine import SyncEngine

logger = logging.getLogger(__name__)


class CleanupManager:
    def __init__(self, engine: SyncEngine) -> None:
        self._engine = engine

    def _prepare(self, project: Project, agent_id: str) -> tuple[RegisteredAgent, Path, list[str]]:
        agent = create_registered_agent(agent_id)
        directory = self._engine.require_directory(project)
        canonical = agent.agent_id.value
        remaining = [item for item in project.agents if parse_agent_id(item) != agent.agent_id]
        logger.debug("Removing %s from '%s', remaining %s", canonical, project.name, remaining)
        return agent, directory, remaining

    def preview_remove_agent(self, project: Project, agent_id: str) -> list[Path]:
        """Paths ``remove_agent`` would delete. Nothing is changed."""
        agent, directory, remaining = self._prepare(project, agent_id)
        return agent.preview_cleanup(directory, remaining)

    def remove_agent(self, project: Project, agent_id: str) -> CleanupResult:
        agent, directory, remaining = self._prepare(project, agent_id)
        removed = agent.cleanup(directory, remaining)

        updated = project.copy()
        updated.agents = remaining
        result = CleanupResult(project=updated, agent_id=agent.agent_id.value, removed=removed)
        result.sync = self._engine.sync_without_autodetect(updated)
        result.project = result.sync.project
        return result
