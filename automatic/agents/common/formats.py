"""Per-agent translation tables between canonical and native MCP entries.

Every agent declares one ``McpFormat``. The same table drives both
directions, so writing and discovery stay symmetric and the lossy parts
of each format are visible as data.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from automatic.agents.common.models import MCPTransport


@dataclass(frozen=True)
class TransportFormat:
    # native "type" value written on export; None omits the key
    tag: str | None
    # canonical fields never written for this transport
    dropped: frozenset[str] = frozenset()
    # canonical field name -> native key
    renames: Mapping[str, str] = field(default_factory=dict)
    # canonical fields omitted when equal to the given value
    omit_when: Mapping[str, Any] = field(default_factory=dict)
    # command and args written together as one array under "command"
    joined_command: bool = False
    # unknown keys carried over from the canonical entry
    keep_extra: bool = True

    def native_key(self, canonical_key: str) -> str:
        return self.renames.get(canonical_key, canonical_key)

    def canonical_key(self, native_key: str) -> str:
        for canonical, native in self.renames.items():
            if native == native_key:
                return canonical
        return native_key


@dataclass(frozen=True)
class McpFormat:
    stdio: TransportFormat
    http: TransportFormat
    sse: TransportFormat
    # native "type" value -> canonical transport
    import_tags: Mapping[str, MCPTransport] = field(default_factory=dict)

    def for_transport(self, transport: MCPTransport) -> TransportFormat:
        if transport == MCPTransport.STDIO:
            return self.stdio
        if transport == MCPTransport.HTTP:
            return self.http
        return self.sse

    def transport_for_tag(self, tag: Any) -> MCPTransport | None:
        if not isinstance(tag, str):
            return None
        return self.import_tags.get(tag)


STRIPPED_STDIO_FIELDS: frozenset[str] = frozenset({"enabled", "timeout"})

STANDARD_IMPORT_TAGS: dict[str, MCPTransport] = {
    "stdio": MCPTransport.STDIO,
    "http": MCPTransport.HTTP,
    "sse": MCPTransport.SSE,
}

# Claude-style mcpServers objects, shared by most editors.
STANDARD_FORMAT = McpFormat(
    stdio=TransportFormat(tag=None, dropped=STRIPPED_STDIO_FIELDS),
    http=TransportFormat(tag="http"),
    sse=TransportFormat(tag="sse"),
    import_tags=STANDARD_IMPORT_TAGS,
)
