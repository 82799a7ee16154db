"""Render projects into the native files of their agents."""

from __future__ import annotations

import logging
from pathlib import Path

from automatic.agents.common.framework import RegisteredAgent, all_agents, create_registered_agent
from automatic.agents.common.models import MCPServerDTO, MCPTransport
from automatic.config import AutomaticPaths, Settings, SettingsRepository, resolve_executable
from automatic.constants import PROJECT_ENV_VAR, SELF_SERVER_COMMAND_ARGS, SELF_SERVER_NAME
from automatic.errors import AutomaticError, DirectoryMissingError
from automatic.instructions.service import InstructionFileService
from automatic.models import AgentFailure, Project, SyncResult
from automatic.registry.mcp_servers import MCPServerRegistry
from automatic.registry.projects import ProjectRepository
from automatic.registry.skills import SkillStore
from automatic.rules.repository import RulesRepository
from automatic.sync.autodetect import AutodetectResult, autodetect_project, known_skill_dirs
from automatic.sync.hub import SkillHub, hub_dir

logger = logging.getLogger(__name__)

HUB_FAILURE_ID = "skills-hub"
INSTRUCTIONS_FAILURE_ID = "instructions"


class SyncEngine:
    """Orchestrates autodetect, persistence and per-agent rendering.

    Every store is built from ``paths`` unless one is passed in. Agents are
    rendered one after another; a failure in one agent is logged, recorded
    on the result and does not stop the others.
    """

    def __init__(
        self,
        paths: AutomaticPaths,
        projects: ProjectRepository | None = None,
        servers: MCPServerRegistry | None = None,
        skills: SkillStore | None = None,
        rules: RulesRepository | None = None,
        settings: Settings | None = None,
        executable: str | None = None,
    ) -> None:
        self.paths = paths
        self.projects = projects or ProjectRepository(paths)
        self.servers = servers or MCPServerRegistry(paths)
        self.skills = skills or SkillStore(paths)
        self.rules = rules or RulesRepository(paths)
        self.settings = settings or SettingsRepository(paths).load()
        self.executable = executable or resolve_executable()
        self.instructions = InstructionFileService(self.rules)
        self.hub = SkillHub(self.skills, self.settings.skill_sync_mode)

    def require_directory(self, project: Project) -> Path:
        directory = project.directory_path
        if directory is None or not directory.is_dir():
            raise DirectoryMissingError(project.name, project.directory)
        return directory

    def self_server(self, project: Project) -> MCPServerDTO:
        return MCPServerDTO(
            name=SELF_SERVER_NAME,
            transport=MCPTransport.STDIO,
            command=self.executable,
            args=list(SELF_SERVER_COMMAND_ARGS),
            env={PROJECT_ENV_VAR: project.name},
        )

    def build_server_map(self, project: Project) -> dict[str, MCPServerDTO]:
        servers = {SELF_SERVER_NAME: self.self_server(project)}
        names = [name for name in project.mcp_servers if name != SELF_SERVER_NAME]
        servers.update(self.servers.load_many(names))
        return servers

    def load_skill_contents(self, project: Project) -> list[tuple[str, str]]:
        return self.skills.load_contents(project.skills)

    def resolve_agents(self, project: Project) -> list[RegisteredAgent]:
        agents: list[RegisteredAgent] = []
        for agent_id in project.agents:
            try:
                agents.append(create_registered_agent(agent_id))
            except AutomaticError as exc:
                logger.warning("Skipping agent '%s' of project '%s': %s", agent_id, project.name, exc)
        return agents

    def autodetect(self, project: Project) -> AutodetectResult:
        directory = self.require_directory(project)
        return autodetect_project(project, directory, all_agents(), self.skills)

    def sync(self, project: Project) -> SyncResult:
        result = self.autodetect(project)
        for name, server in result.servers.items():
            if self.servers.exists(name):
                continue
            try:
                self.servers.save(server)
            except AutomaticError as exc:
                logger.warning("Cannot register discovered server '%s': %s", name, exc)
        synced = self.projects.save(result.project)
        return self.render(synced)

    def sync_without_autodetect(self, project: Project) -> SyncResult:
        self.require_directory(project)
        synced = self.projects.save(project)
        return self.render(synced)

    def render(self, project: Project) -> SyncResult:
        directory = self.require_directory(project)
        result = SyncResult(project=project)
        agents = self.resolve_agents(project)
        if not agents:
            return result

        servers = self.build_server_map(project)
        contents = self.load_skill_contents(project)
        hub = hub_dir(directory)
        try:
            search_dirs = known_skill_dirs(directory, all_agents())
            result.written.extend(self.hub.materialize(directory, project, contents, search_dirs))
        except (AutomaticError, OSError) as exc:
            logger.warning("Failed to prepare skills hub for '%s': %s", project.name, exc)
            result.failures.append(AgentFailure(HUB_FAILURE_ID, exc))

        for agent in agents:
            try:
                self.render_agent(agent, directory, project, servers, contents, hub, result)
            except (AutomaticError, OSError) as exc:
                logger.warning("Failed to sync %s for '%s': %s", agent.label, project.name, exc)
                result.failures.append(AgentFailure(agent.agent_id.value, exc))

        filenames = [agent.project_file_name for agent in agents]
        try:
            result.written.extend(self.instructions.refresh(project, directory, filenames))
            result.written.extend(self.instructions.replicate_unified(project, directory, filenames))
        except (AutomaticError, OSError) as exc:
            logger.warning("Failed to update instruction files for '%s': %s", project.name, exc)
            result.failures.append(AgentFailure(INSTRUCTIONS_FAILURE_ID, exc))
        return result

    def render_agent(
        self,
        agent: RegisteredAgent,
        directory: Path,
        project: Project,
        servers: dict[str, MCPServerDTO],
        contents: list[tuple[str, str]],
        hub: Path,
        result: SyncResult,
    ) -> None:
        written: list[Path] = []
        for skill_dir in agent.skill_dirs(directory):
            written.extend(self.hub.propagate(skill_dir, hub, project.skills))
        written.extend(agent.sync_skills(directory, contents, project.skills, project.local_skills))
        config_path = agent.write_mcp_config(directory, servers)
        if config_path is not None:
            written.append(config_path)
        elif agent.mcp_note:
            result.notes.append(f"{agent.label}: {agent.mcp_note}")
        result.written.extend(written)
