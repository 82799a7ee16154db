"""Operations on skills that live only inside one project directory."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, TypeVar

from automatic.constants import GENERIC_SKILLS_DIRNAME, SKILL_FILENAME
from automatic.errors import NotFoundError
from automatic.filesystem import copy_path, path_present
from automatic.models import Project
from automatic.sync.engine import SyncEngine
from automatic.sync.hub import hub_dir
from automatic.utils import ensure_valid_name, write_text

logger = logging.getLogger(__name__)

WORKER_STACK_SIZE = 8 * 1024 * 1024

T = TypeVar("T")


def run_in_large_stack_worker(func: Callable[[], T]) -> T:
    """Run ``func`` on a worker thread with an enlarged stack and return its result."""
    outcome: dict[str, object] = {}

    def _target() -> None:
        try:
            outcome["value"] = func()
        except BaseException as exc:  # re-raised on the calling thread
            outcome["error"] = exc

    previous = threading.stack_size(WORKER_STACK_SIZE)
    try:
        worker = threading.Thread(target=_target, name="automatic-local-skills")
        worker.start()
    finally:
        threading.stack_size(previous)
    worker.join()
    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["value"]  # type: ignore[return-value]


class LocalSkillService:
    def __init__(self, engine: SyncEngine) -> None:
        self._engine = engine

    def skill_dirs(self, project: Project) -> list[Path]:
        directory = self._engine.require_directory(project)
        dirs: list[Path] = []
        for agent in self._engine.resolve_agents(project):
            for skill_dir in agent.skill_dirs(directory):
                if skill_dir not in dirs:
                    dirs.append(skill_dir)
        for extra in (hub_dir(directory), directory / GENERIC_SKILLS_DIRNAME):
            if extra not in dirs:
                dirs.append(extra)
        return dirs

    def find_local_skill(self, project: Project, name: str) -> Path | None:
        ensure_valid_name(name, "skill")
        for skill_dir in self.skill_dirs(project):
            candidate = skill_dir / name
            if (candidate / SKILL_FILENAME).is_file():
                return candidate
        return None

    def read_local_skill(self, project: Project, name: str) -> str:
        found = self.find_local_skill(project, name)
        if found is None:
            raise NotFoundError("Local skill", name)
        return (found / SKILL_FILENAME).read_text(encoding="utf-8")

    def save_local_skill(self, project: Project, name: str, content: str) -> Path:
        found = self.find_local_skill(project, name)
        if found is None:
            found = hub_dir(self._engine.require_directory(project)) / name
        path = found / SKILL_FILENAME
        write_text(path, content)
        if name not in project.local_skills and name not in project.skills:
            project.local_skills.append(name)
            self._engine.projects.save(project)
        return path

    def import_local_skill(self, project: Project, name: str) -> Project:
        """Promote a local skill into the global registry."""
        found = self.find_local_skill(project, name)
        if found is None:
            raise NotFoundError("Local skill", name)
        self._engine.skills.import_skill_dir(name, found.resolve())
        if name in project.local_skills:
            project.local_skills.remove(name)
        if name not in project.skills:
            project.skills.append(name)
        return self._engine.projects.save(project)

    def sync_local_skills_across_agents(self, project: Project) -> list[Path]:
        """Copy each local skill into every skill directory that lacks it."""
        directory = self._engine.require_directory(project)
        created: list[Path] = []
        targets = [
            skill_dir
            for agent in self._engine.resolve_agents(project)
            for skill_dir in agent.skill_dirs(directory)
        ]
        for name in project.local_skills:
            source = self.find_local_skill(project, name)
            if source is None:
                logger.warning("Local skill '%s' of '%s' not found", name, project.name)
                continue
            source = source.resolve()
            for skill_dir in dict.fromkeys(targets):
                target = skill_dir / name
                if path_present(target):
                    continue
                copy_path(source, target)
                created.append(target)
        return created

    def sync_local_skills_for_projects(self, names: list[str]) -> dict[str, list[Path]]:
        def _work() -> dict[str, list[Path]]:
            created: dict[str, list[Path]] = {}
            for name in names:
                project = self._engine.projects.read(name)
                directory = project.directory_path
                if directory is None or not directory.is_dir() or not project.local_skills:
                    continue
                created[name] = self.sync_local_skills_across_agents(project)
            return created

        return run_in_large_stack_worker(_work)
