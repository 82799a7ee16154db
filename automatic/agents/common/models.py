from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MCPTransport(str, Enum):
    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


STDIO_FIELDS: tuple[str, ...] = ("command", "args", "env")
REMOTE_FIELDS: tuple[str, ...] = ("url", "headers", "oauth")
COMMON_FIELDS: tuple[str, ...] = ("enabled", "timeout")


def transport_fields(transport: MCPTransport) -> tuple[str, ...]:
    if transport == MCPTransport.STDIO:
        return STDIO_FIELDS + COMMON_FIELDS
    return REMOTE_FIELDS + COMMON_FIELDS


@dataclass(frozen=True)
class MCPServerDTO:
    """Canonical MCP server definition shared by every agent format."""

    name: str
    transport: MCPTransport
    command: str | None = None
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    url: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    oauth: dict[str, Any] | None = None
    enabled: bool | None = None
    timeout: int | float | None = None
    extra: dict[str, Any] = field(default_factory=dict)
