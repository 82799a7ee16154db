"""Configuration root and user settings."""

from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from automatic.constants import (
    APP_DIRNAME,
    CLAUDE_SKILLS_RELATIVE,
    EXECUTABLE_NAME,
    HUB_SKILLS_RELATIVE,
    MCP_SERVERS_DIRNAME,
    PROJECTS_DIRNAME,
    RULES_DIRNAME,
    SETTINGS_FILENAME,
    SKILLS_REGISTRY_FILENAME,
)
from automatic.errors import MalformedDataError
from automatic.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)


class SkillSyncMode(str, Enum):
    SYMLINK = "symlink"
    COPY = "copy"


@dataclass(frozen=True)
class AutomaticPaths:
    """Every location the engine reads or writes outside a project directory.

    The home directory is resolved once here and passed explicitly to
    every store, so tests can point the whole engine at a temporary root.
    """

    home: Path

    @classmethod
    def from_home(cls, home: Path | None = None) -> "AutomaticPaths":
        return cls(home=(home or Path.home()).expanduser())

    @property
    def app_dir(self) -> Path:
        return self.home / APP_DIRNAME

    @property
    def projects_dir(self) -> Path:
        return self.app_dir / PROJECTS_DIRNAME

    @property
    def mcp_servers_dir(self) -> Path:
        return self.app_dir / MCP_SERVERS_DIRNAME

    @property
    def rules_dir(self) -> Path:
        return self.app_dir / RULES_DIRNAME

    @property
    def skills_registry_path(self) -> Path:
        return self.app_dir / SKILLS_REGISTRY_FILENAME

    @property
    def settings_path(self) -> Path:
        return self.app_dir / SETTINGS_FILENAME

    @property
    def agents_skills_dir(self) -> Path:
        return self.home.joinpath(*HUB_SKILLS_RELATIVE)

    @property
    def claude_skills_dir(self) -> Path:
        return self.home.joinpath(*CLAUDE_SKILLS_RELATIVE)


@dataclass(frozen=True)
class Settings:
    skill_sync_mode: SkillSyncMode = SkillSyncMode.SYMLINK
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Settings":
        raw_mode = payload.get("skill_sync_mode", SkillSyncMode.SYMLINK.value)
        try:
            mode = SkillSyncMode(raw_mode)
        except ValueError:
            logger.warning("Unknown skill_sync_mode %r, using symlink", raw_mode)
            mode = SkillSyncMode.SYMLINK
        extra = {k: v for k, v in payload.items() if k != "skill_sync_mode"}
        return cls(skill_sync_mode=mode, extra=extra)

    def as_dict(self) -> dict[str, Any]:
        return {**self.extra, "skill_sync_mode": self.skill_sync_mode.value}


class SettingsRepository:
    def __init__(self, paths: AutomaticPaths) -> None:
        self._path = paths.settings_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        payload, error = read_json_safe(self._path)
        if error is not None:
            raise MalformedDataError(self._path, error)
        if not isinstance(payload, dict):
            return Settings()
        return Settings.from_dict(payload)

    def save(self, settings: Settings) -> None:
        write_json(self._path, settings.as_dict())


def resolve_executable() -> str:
    """Path of the engine binary referenced by the self server entry."""
    found = shutil.which(EXECUTABLE_NAME)
    if found:
        return found
    argv0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if argv0 is not None and argv0.name == EXECUTABLE_NAME:
        return str(argv0.resolve())
    return EXECUTABLE_NAME
