"""Project persistence.

Each project has a registry entry in ``~/.automatic/projects``. Once the
project has an existing directory, its full configuration lives in
``<dir>/.automatic/project.json`` and the registry entry only points at it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from automatic.config import AutomaticPaths
from automatic.constants import APP_DIRNAME, PROJECT_CONFIG_FILENAME
from automatic.errors import (
    AlreadyExistsError,
    InvalidConfigSchemaError,
    MalformedDataError,
    NotFoundError,
)
from automatic.filesystem import remove_path
from automatic.models import Project
from automatic.utils import ensure_valid_name, is_valid_name, now_iso, read_json_safe, write_json

logger = logging.getLogger(__name__)


def project_config_path(directory: Path) -> Path:
    return directory / APP_DIRNAME / PROJECT_CONFIG_FILENAME


class ProjectRepository:
    def __init__(self, paths: AutomaticPaths) -> None:
        self._root = paths.projects_dir

    @property
    def root(self) -> Path:
        return self._root

    def _registry_path(self, name: str) -> Path:
        return self._root / f"{name}.json"

    def list_names(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            child.stem
            for child in self._root.iterdir()
            if child.is_file() and child.suffix == ".json" and is_valid_name(child.stem)
        )

    def list_projects(self) -> list[Project]:
        projects: list[Project] = []
        for name in self.list_names():
            try:
                projects.append(self.read(name))
            except (MalformedDataError, InvalidConfigSchemaError) as exc:
                logger.warning("Skipping project '%s': %s", name, exc)
        return projects

    def exists(self, name: str) -> bool:
        return is_valid_name(name) and self._registry_path(name).is_file()

    def read(self, name: str) -> Project:
        ensure_valid_name(name, "project")
        registry_path = self._registry_path(name)
        entry = self._load_object(registry_path)
        if entry is None:
            raise NotFoundError("Project", name)

        directory = str(entry.get("directory") or "")
        if directory:
            local_path = project_config_path(Path(directory))
            local = self._load_object(local_path)
            if local is not None:
                entry = {**local, "directory": directory}

        entry["name"] = name
        return Project.from_dict(entry)

    def save(self, project: Project) -> Project:
        project.validate()
        stamp = now_iso()
        if not project.created_at:
            project.created_at = stamp
        project.updated_at = stamp

        payload = project.as_dict()
        directory = project.directory_path
        if directory is not None and directory.is_dir():
            write_json(project_config_path(directory), payload)
            write_json(
                self._registry_path(project.name),
                {
                    "name": project.name,
                    "directory": project.directory,
                    "created_at": project.created_at,
                    "updated_at": project.updated_at,
                },
            )
        else:
            write_json(self._registry_path(project.name), payload)
        return project

    def rename(self, old_name: str, new_name: str) -> Project:
        ensure_valid_name(new_name, "project")
        if self.exists(new_name):
            raise AlreadyExistsError("Project", new_name)
        project = self.read(old_name)
        project.name = new_name
        self.save(project)
        remove_path(self._registry_path(old_name))
        return project

    def delete(self, name: str) -> bool:
        ensure_valid_name(name, "project")
        path = self._registry_path(name)
        if not path.exists():
            return False
        remove_path(path)
        return True

    @staticmethod
    def _load_object(path: Path) -> dict[str, Any] | None:
        payload, error = read_json_safe(path)
        if error is not None:
            raise MalformedDataError(path, error)
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise InvalidConfigSchemaError(path, "must be a JSON object")
        return payload
