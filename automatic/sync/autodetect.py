import logging
from dataclasses import dataclass, field
from pathlib import Path

from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.models import MCPServerDTO
from automatic.constants import GENERIC_SKILLS_DIRNAME, SKILL_FILENAME
from automatic.models import Project
from automatic.registry.skills import SkillStore
from automatic.utils import is_valid_name

logger = logging.getLogger(__name__)


@dataclass
class AutodetectResult:
    project: Project
    agents: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    local_skills: list[str] = field(default_factory=list)
    servers: dict[str, MCPServerDTO] = field(default_factory=dict)


def known_skill_dirs(directory: Path, agents: list[RegisteredAgent]) -> list[Path]:
    """Every skill directory any variant uses, plus the generic ``skills/``."""
    seen: list[Path] = []
    for agent in agents:
        for skill_dir in agent.skill_dirs(directory):
            if skill_dir not in seen:
                seen.append(skill_dir)
    generic = directory / GENERIC_SKILLS_DIRNAME
    if generic not in seen:
        seen.append(generic)
    return seen


def scan_skill_names(skill_dir: Path) -> list[str]:
    if not skill_dir.is_dir():
        return []
    names: list[str] = []
    for child in sorted(skill_dir.iterdir()):
        if is_valid_name(child.name) and (child / SKILL_FILENAME).is_file():
            names.append(child.name)
    return names


def autodetect_project(
    project: Project,
    directory: Path,
    agents: list[RegisteredAgent],
    store: SkillStore,
) -> AutodetectResult:
    """Merge what is on disk into a copy of ``project``. Nothing is written."""
    merged = project.copy()
    result = AutodetectResult(project=merged)

    for agent in agents:
        if agent.detect(directory) and merged.merge_agent(agent.agent_id.value):
            logger.debug("Detected %s in %s", agent.label, directory)
            result.agents.append(agent.agent_id.value)

    for skill_dir in known_skill_dirs(directory, agents):
        for name in scan_skill_names(skill_dir):
            if store.exists(name):
                if merged.merge_skill(name):
                    result.skills.append(name)
            elif merged.merge_local_skill(name):
                result.local_skills.append(name)

    for agent in agents:
        for name, server in agent.discover_mcp_servers(directory).items():
            if name in result.servers:
                continue
            result.servers[name] = server
            merged.merge_mcp_server(name)
    return result
