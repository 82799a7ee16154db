import logging
import tempfile
from pathlib import Path

from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.models import MCPServerDTO
from automatic.agents.common.skills import stale_skill_names
from automatic.constants import SKILL_FILENAME
from automatic.errors import AutomaticError
from automatic.filesystem import copy_path
from automatic.models import AgentDrift, DriftedFile, DriftReason, DriftReport, Project
from automatic.sync.engine import SyncEngine

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def compare_file(expected_path: Path, actual_path: Path, display: str) -> DriftedFile | None:
    if not actual_path.exists():
        return DriftedFile(path=display, reason=DriftReason.MISSING)
    try:
        expected = _read_text(expected_path)
        actual = _read_text(actual_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot compare %s: %s", display, exc)
        return DriftedFile(path=display, reason=DriftReason.UNREADABLE)
    if expected == actual:
        return None
    return DriftedFile(
        path=display,
        reason=DriftReason.MODIFIED,
        expected=expected,
        actual=actual,
    )


def _native_config_paths(agent: RegisteredAgent, directory: Path) -> list[Path]:
    if agent.repository is None:
        return []
    present = [path for path in agent.config_paths(directory) if path.exists()]
    return present or [agent.repository.config_path(directory)]


def _unreadable(directory: Path, paths: list[Path]) -> list[DriftedFile]:
    return [
        DriftedFile(path=path.relative_to(directory).as_posix(), reason=DriftReason.UNREADABLE)
        for path in paths
    ]


class DriftDetector:
    """Compares what a sync would write against the project directory.

    Everything is rendered into throwaway scratch directories, so the
    project directory is only ever read.
    """

    def __init__(self, engine: SyncEngine) -> None:
        self._engine = engine

    def check(self, project: Project) -> DriftReport:
        directory = project.directory_path
        if directory is None or not directory.is_dir() or not project.agents:
            return DriftReport()

        servers = self._engine.build_server_map(project)
        contents = self._engine.load_skill_contents(project)
        report = DriftReport()
        for agent in self._engine.resolve_agents(project):
            files: list[DriftedFile] = []
            try:
                files.extend(self._check_mcp(agent, directory, servers))
            except (AutomaticError, OSError) as exc:
                logger.warning("Cannot reproduce %s config: %s", agent.label, exc)
                files.extend(_unreadable(directory, _native_config_paths(agent, directory)))
            try:
                files.extend(self._check_skills(agent, directory, project, contents))
            except (AutomaticError, OSError) as exc:
                logger.warning("Cannot reproduce %s skills: %s", agent.label, exc)
                files.extend(_unreadable(directory, agent.skill_dirs(directory)))
            report.agents.append(
                AgentDrift(agent_id=agent.agent_id.value, agent_label=agent.label, files=files)
            )
        return report

    def _check_mcp(
        self,
        agent: RegisteredAgent,
        directory: Path,
        servers: dict[str, MCPServerDTO],
    ) -> list[DriftedFile]:
        with tempfile.TemporaryDirectory(prefix="automatic-drift-") as tmp:
            scratch = Path(tmp)
            # merged settings files replay the keys they do not manage
            for path in agent.config_paths(directory):
                if path.is_file():
                    copy_path(path, scratch / path.relative_to(directory))
            if agent.write_mcp_config(scratch, servers) is None:
                return []
            return self._compare_tree(scratch, directory)

    def _check_skills(
        self,
        agent: RegisteredAgent,
        directory: Path,
        project: Project,
        contents: list[tuple[str, str]],
    ) -> list[DriftedFile]:
        local = set(project.local_skills)
        files: list[DriftedFile] = []
        with tempfile.TemporaryDirectory(prefix="automatic-drift-") as tmp:
            scratch = Path(tmp)
            agent.sync_skills(scratch, contents, project.skills, project.local_skills)
            for skill_dir in agent.skill_dirs(directory):
                relative = skill_dir.relative_to(directory)
                for name, _ in contents:
                    if name in local:
                        continue
                    item = compare_file(
                        scratch / relative / name / SKILL_FILENAME,
                        skill_dir / name / SKILL_FILENAME,
                        (relative / name / SKILL_FILENAME).as_posix(),
                    )
                    if item is not None:
                        files.append(item)
                for name in stale_skill_names(skill_dir, project.skills, project.local_skills):
                    files.append(
                        DriftedFile(path=(relative / name).as_posix(), reason=DriftReason.STALE)
                    )
        return files

    @staticmethod
    def _compare_tree(scratch: Path, directory: Path) -> list[DriftedFile]:
        files: list[DriftedFile] = []
        for expected_path in sorted(scratch.rglob("*")):
            if not expected_path.is_file():
                continue
            relative = expected_path.relative_to(scratch)
            item = compare_file(expected_path, directory / relative, relative.as_posix())
            if item is not None:
                files.append(item)
        return files
