"""Global skill registry spread over two home-level locations.

``~/.agents/skills`` is canonical. ``~/.claude/skills`` predates it and
is still read, and kept in step when a skill already lives there.
"""

from __future__ import annotations

import logging
from pathlib import Path

from automatic.config import AutomaticPaths
from automatic.constants import SKILL_FILENAME
from automatic.errors import MalformedDataError, NotFoundError
from automatic.filesystem import copy_path, remove_path, replace_with_copy
from automatic.skills.models import SkillEntry, SkillSource
from automatic.skills.parser import parse_skill
from automatic.utils import ensure_valid_name, is_valid_name, read_json_safe, write_json, write_text

logger = logging.getLogger(__name__)


def _skill_names(root: Path) -> set[str]:
    if not root.is_dir():
        return set()
    return {
        child.name
        for child in root.iterdir()
        if child.is_dir() and is_valid_name(child.name) and (child / SKILL_FILENAME).is_file()
    }


def has_companion_files(skill_dir: Path) -> bool:
    for child in skill_dir.rglob("*"):
        if child.is_file() and child != skill_dir / SKILL_FILENAME:
            return True
    return False


class SkillStore:
    def __init__(self, paths: AutomaticPaths) -> None:
        self._agents_dir = paths.agents_skills_dir
        self._claude_dir = paths.claude_skills_dir
        self._sources_path = paths.skills_registry_path

    @property
    def agents_dir(self) -> Path:
        return self._agents_dir

    @property
    def claude_dir(self) -> Path:
        return self._claude_dir

    def list_names(self) -> list[str]:
        return sorted(_skill_names(self._agents_dir) | _skill_names(self._claude_dir))

    def exists(self, name: str) -> bool:
        return self.get_skill_dir(name) is not None

    def get_skill_dir(self, name: str) -> Path | None:
        if not is_valid_name(name):
            return None
        for root in (self._agents_dir, self._claude_dir):
            candidate = root / name
            if (candidate / SKILL_FILENAME).is_file():
                return candidate
        return None

    def list_skills(self) -> list[SkillEntry]:
        in_agents = _skill_names(self._agents_dir)
        in_claude = _skill_names(self._claude_dir)
        sources = self.read_sources()
        entries: list[SkillEntry] = []
        for name in sorted(in_agents | in_claude):
            skill_dir = self.get_skill_dir(name)
            description = ""
            if skill_dir is not None:
                try:
                    description = parse_skill(skill_dir / SKILL_FILENAME).metadata.description
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Cannot read skill '%s': %s", name, exc)
            entries.append(
                SkillEntry(
                    name=name,
                    in_agents=name in in_agents,
                    in_claude=name in in_claude,
                    has_resources=skill_dir is not None and has_companion_files(skill_dir),
                    description=description,
                    source=sources.get(name),
                )
            )
        return entries

    def read_skill(self, name: str) -> str:
        ensure_valid_name(name, "skill")
        skill_dir = self.get_skill_dir(name)
        if skill_dir is None:
            raise NotFoundError("Skill", name)
        return (skill_dir / SKILL_FILENAME).read_text(encoding="utf-8")

    def load_contents(self, names: list[str]) -> list[tuple[str, str]]:
        contents: list[tuple[str, str]] = []
        for name in names:
            try:
                content = self.read_skill(name)
            except NotFoundError:
                logger.warning("Skill '%s' is not in the global registry", name)
                continue
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read skill '%s': %s", name, exc)
                continue
            if content.strip():
                contents.append((name, content))
        return contents

    def save_skill(self, name: str, content: str) -> Path:
        ensure_valid_name(name, "skill")
        path = self._agents_dir / name / SKILL_FILENAME
        write_text(path, content)
        mirror = self._claude_dir / name / SKILL_FILENAME
        if mirror.is_file() and not mirror.parent.is_symlink():
            write_text(mirror, content)
        return path

    def import_skill_dir(self, name: str, source_dir: Path) -> Path:
        """Copy a whole skill directory, companions included, into the registry."""
        ensure_valid_name(name, "skill")
        if not (source_dir / SKILL_FILENAME).is_file():
            raise NotFoundError("Skill document", str(source_dir / SKILL_FILENAME))
        target = self._agents_dir / name
        replace_with_copy(source_dir, target)
        return target

    def delete_skill(self, name: str) -> bool:
        ensure_valid_name(name, "skill")
        removed = False
        for root in (self._agents_dir, self._claude_dir):
            target = root / name
            if target.exists() or target.is_symlink():
                remove_path(target)
                removed = True
        self.remove_source(name)
        return removed

    def sync_skill(self, name: str) -> list[Path]:
        """Copy a skill into whichever global location is missing it."""
        ensure_valid_name(name, "skill")
        source = self.get_skill_dir(name)
        if source is None:
            raise NotFoundError("Skill", name)
        created: list[Path] = []
        for root in (self._agents_dir, self._claude_dir):
            target = root / name
            if target.exists() or target.is_symlink():
                continue
            copy_path(source, target)
            created.append(target)
        return created

    def sync_all_skills(self) -> list[Path]:
        created: list[Path] = []
        for name in self.list_names():
            created.extend(self.sync_skill(name))
        return created

    def read_sources(self) -> dict[str, SkillSource]:
        payload, error = read_json_safe(self._sources_path)
        if error is not None:
            raise MalformedDataError(self._sources_path, error)
        if not isinstance(payload, dict):
            return {}
        sources: dict[str, SkillSource] = {}
        for name, raw in payload.items():
            if not isinstance(raw, dict):
                continue
            source = raw.get("source")
            if isinstance(source, str):
                sources[name] = SkillSource(source=source, skill_id=str(raw.get("id", name)))
        return sources

    def record_source(self, name: str, source: str, skill_id: str | None = None) -> None:
        ensure_valid_name(name, "skill")
        sources = self.read_sources()
        sources[name] = SkillSource(source=source, skill_id=skill_id or name)
        write_json(self._sources_path, {key: item.as_dict() for key, item in sources.items()})

    def remove_source(self, name: str) -> bool:
        sources = self.read_sources()
        if name not in sources:
            return False
        del sources[name]
        write_json(self._sources_path, {key: item.as_dict() for key, item in sources.items()})
        return True
