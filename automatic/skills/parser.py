"""Parse skill documents with YAML frontmatter."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from automatic.constants import SKILL_FILENAME
from automatic.skills.models import Skill, SkillMetadata

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        raw = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(raw, dict):
        raw = {}
    return raw, text[match.end() :]


def frontmatter_name(text: str) -> str | None:
    raw, _ = split_frontmatter(text)
    name = raw.get("name")
    return str(name) if name is not None else None


def parse_skill_text(name: str, text: str, path: Path) -> Skill:
    raw, content = split_frontmatter(text)
    metadata = SkillMetadata(
        name=str(raw.get("name", name)),
        description=str(raw.get("description", "") or ""),
    )
    return Skill(name=name, source_path=path, metadata=metadata, content=content)


def parse_skill(path: Path) -> Skill:
    text = path.read_text(encoding="utf-8")
    name = path.parent.name if path.name == SKILL_FILENAME else path.stem
    return parse_skill_text(name, text, path)
