from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from automatic.errors import InvalidNameError
from automatic.utils import is_valid_name, unique


class InstructionMode(str, Enum):
    UNIFIED = "unified"
    PER_AGENT = "per_agent"


class DriftReason(str, Enum):
    MISSING = "missing"
    MODIFIED = "modified"
    STALE = "stale"
    UNREADABLE = "unreadable"


@dataclass
class Project:
    name: str
    directory: str = ""
    description: str = ""
    skills: list[str] = field(default_factory=list)
    local_skills: list[str] = field(default_factory=list)
    mcp_servers: list[str] = field(default_factory=list)
    agents: list[str] = field(default_factory=list)
    file_rules: dict[str, list[str]] = field(default_factory=dict)
    instruction_mode: InstructionMode = InstructionMode.PER_AGENT
    created_at: str = ""
    updated_at: str = ""

    @property
    def directory_path(self) -> Optional[Path]:
        return Path(self.directory) if self.directory else None

    def validate(self) -> None:
        if not is_valid_name(self.name):
            raise InvalidNameError("project", self.name)
        for kind, names in (
            ("skill", self.skills),
            ("local skill", self.local_skills),
            ("MCP server", self.mcp_servers),
            ("agent", self.agents),
        ):
            for name in names:
                if not is_valid_name(name):
                    raise InvalidNameError(kind, name)

    def copy(self) -> "Project":
        return deepcopy(self)

    def merge_skill(self, name: str) -> bool:
        if name in self.skills or name in self.local_skills:
            return False
        self.skills.append(name)
        return True

    def merge_local_skill(self, name: str) -> bool:
        if name in self.skills or name in self.local_skills:
            return False
        self.local_skills.append(name)
        return True

    def merge_mcp_server(self, name: str) -> bool:
        if name in self.mcp_servers:
            return False
        self.mcp_servers.append(name)
        return True

    def merge_agent(self, agent_id: str) -> bool:
        if agent_id in self.agents:
            return False
        self.agents.append(agent_id)
        return True

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Project":
        def _names(key: str) -> list[str]:
            raw = payload.get(key)
            if not isinstance(raw, list):
                return []
            return unique([str(item) for item in raw])

        file_rules: dict[str, list[str]] = {}
        raw_rules = payload.get("file_rules")
        if isinstance(raw_rules, dict):
            for filename, rule_ids in raw_rules.items():
                if isinstance(rule_ids, list):
                    file_rules[str(filename)] = [str(item) for item in rule_ids]

        raw_mode = payload.get("instruction_mode", InstructionMode.PER_AGENT.value)
        try:
            mode = InstructionMode(raw_mode)
        except ValueError:
            mode = InstructionMode.PER_AGENT

        return cls(
            name=str(payload.get("name", "")),
            directory=str(payload.get("directory") or ""),
            description=str(payload.get("description") or ""),
            skills=_names("skills"),
            local_skills=_names("local_skills"),
            mcp_servers=_names("mcp_servers"),
            agents=_names("agents"),
            file_rules=file_rules,
            instruction_mode=mode,
            created_at=str(payload.get("created_at") or ""),
            updated_at=str(payload.get("updated_at") or ""),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "directory": self.directory,
            "description": self.description,
            "skills": list(self.skills),
            "local_skills": list(self.local_skills),
            "mcp_servers": list(self.mcp_servers),
            "agents": list(self.agents),
            "file_rules": {k: list(v) for k, v in self.file_rules.items()},
            "instruction_mode": self.instruction_mode.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class DriftedFile:
    path: str
    reason: DriftReason
    expected: Optional[str] = None
    actual: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        item: dict[str, Any] = {"path": self.path, "reason": self.reason.value}
        if self.reason == DriftReason.MODIFIED:
            item["expected"] = self.expected
            item["actual"] = self.actual
        return item


@dataclass(frozen=True)
class AgentDrift:
    agent_id: str
    agent_label: str
    files: list[DriftedFile] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "agent_label": self.agent_label,
            "files": [item.as_dict() for item in self.files],
        }


@dataclass(frozen=True)
class DriftReport:
    agents: list[AgentDrift] = field(default_factory=list)

    @property
    def drifted(self) -> bool:
        return any(agent.files for agent in self.agents)

    def as_dict(self) -> dict[str, Any]:
        return {
            "drifted": self.drifted,
            "agents": [agent.as_dict() for agent in self.agents],
        }


@dataclass(frozen=True)
class AgentFailure:
    agent_id: str
    error: Exception


@dataclass
class SyncResult:
    project: Project
    written: list[Path] = field(default_factory=list)
    failures: list[AgentFailure] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class CleanupResult:
    project: Project
    agent_id: str
    removed: list[Path] = field(default_factory=list)
    sync: Optional[SyncResult] = None
