"""Project skill hub and propagation into per-agent skill directories."""

from __future__ import annotations

import logging
from pathlib import Path

from automatic.agents.common.skills import remove_stale_skills
from automatic.config import SkillSyncMode
from automatic.constants import HUB_SKILLS_RELATIVE, SKILL_FILENAME
from automatic.filesystem import content_equal, copy_path, path_present, remove_path, replace_with_copy
from automatic.models import Project
from automatic.registry.skills import SkillStore
from automatic.sync.symlink_planning import ensure_symlink
from automatic.utils import is_valid_name, write_text_if_changed

logger = logging.getLogger(__name__)


def hub_dir(directory: Path) -> Path:
    return directory.joinpath(*HUB_SKILLS_RELATIVE)


class SkillHub:
    def __init__(self, store: SkillStore, mode: SkillSyncMode = SkillSyncMode.SYMLINK) -> None:
        self._store = store
        self._mode = mode

    @property
    def mode(self) -> SkillSyncMode:
        return self._mode

    def materialize(
        self,
        directory: Path,
        project: Project,
        contents: list[tuple[str, str]],
        search_dirs: list[Path],
    ) -> list[Path]:
        """Bring ``<dir>/.agents/skills`` in line with the project selection.

        Selected skills are full copies of the global skill directory.
        Local skills found in any of ``search_dirs`` are copied in once and
        then left alone.
        """
        hub = hub_dir(directory)
        written: list[Path] = []
        remove_stale_skills(hub, project.skills, project.local_skills)

        documents = dict(contents)
        for name in project.skills:
            target = hub / name
            source = self._store.get_skill_dir(name)
            if source is not None:
                if not content_equal(source, target):
                    replace_with_copy(source, target)
                    written.append(target)
            elif name in documents:
                if target.is_symlink() and not target.exists():
                    remove_path(target)
                if write_text_if_changed(target / SKILL_FILENAME, documents[name]):
                    written.append(target / SKILL_FILENAME)

        for name in project.local_skills:
            target = hub / name
            if not is_valid_name(name) or path_present(target):
                continue
            source = _find_skill_dir(name, search_dirs, exclude=hub)
            if source is None:
                continue
            copy_path(source, target)
            written.append(target)
        return written

    def propagate(self, skill_dir: Path, hub: Path, names: list[str]) -> list[Path]:
        """Materialize hub skills into an agent directory other than the hub."""
        if skill_dir.resolve() == hub.resolve():
            return []
        written: list[Path] = []
        for name in names:
            source = hub / name
            if not is_valid_name(name) or not source.is_dir():
                continue
            target = skill_dir / name
            if self._mode == SkillSyncMode.SYMLINK:
                ensure_symlink(target, source)
            elif not content_equal(source, target):
                replace_with_copy(source, target)
            written.append(target)
        return written


def _find_skill_dir(name: str, search_dirs: list[Path], exclude: Path) -> Path | None:
    for skill_dir in search_dirs:
        if skill_dir == exclude:
            continue
        candidate = skill_dir / name
        if (candidate / SKILL_FILENAME).is_file():
            return candidate.resolve()
    return None
