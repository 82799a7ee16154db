"""Skill data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class SkillMetadata:
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class Skill:
    name: str
    source_path: Path
    metadata: SkillMetadata
    content: str


@dataclass(frozen=True)
class SkillSource:
    source: str
    skill_id: str

    def as_dict(self) -> dict[str, str]:
        return {"source": self.source, "id": self.skill_id}


@dataclass(frozen=True)
class SkillEntry:
    name: str
    in_agents: bool
    in_claude: bool
    has_resources: bool
    description: str = ""
    source: Optional[SkillSource] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "in_agents": self.in_agents,
            "in_claude": self.in_claude,
            "has_resources": self.has_resources,
            "description": self.description,
            "source": self.source.as_dict() if self.source else None,
        }
