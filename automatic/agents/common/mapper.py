import logging
from typing import Any

from automatic.agents.common.formats import STANDARD_FORMAT, McpFormat
from automatic.agents.common.interfaces.mapper import IAgentMCPMapper
from automatic.agents.common.models import MCPServerDTO, MCPTransport, transport_fields
from automatic.agents.common.utils import (
    infer_transport,
    server_from_canonical,
    server_to_canonical,
)

logger = logging.getLogger(__name__)


class TableMCPMapper(IAgentMCPMapper):
    """Translate MCP entries through a fixed ``McpFormat`` table."""

    FORMAT: McpFormat = STANDARD_FORMAT

    def __init__(self, mcp_format: McpFormat | None = None) -> None:
        self._format = mcp_format or self.FORMAT

    @property
    def format(self) -> McpFormat:
        return self._format

    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        mapped: dict[str, Any] = {}
        for name, server in servers.items():
            mapped[name] = self.export_server(server)
        return mapped

    def to_common(self, payload: dict[str, Any]) -> dict[str, MCPServerDTO]:
        mapped: dict[str, MCPServerDTO] = {}
        for name, raw in payload.items():
            if not isinstance(raw, dict):
                continue
            try:
                mapped[name] = self.import_server(name, raw)
            except ValueError as exc:
                logger.debug("Skipping MCP entry %s: %s", name, exc)
        return mapped

    def export_server(self, server: MCPServerDTO) -> dict[str, Any]:
        table = self._format.for_transport(server.transport)
        canonical = server_to_canonical(server)

        out: dict[str, Any] = {}
        if table.tag is not None:
            out["type"] = table.tag
        for key in transport_fields(server.transport):
            if key not in canonical or key in table.dropped:
                continue
            value = canonical[key]
            if key in table.omit_when and value == table.omit_when[key]:
                continue
            if table.joined_command and key == "args":
                continue
            if table.joined_command and key == "command":
                value = [value, *canonical.get("args", [])]
            out[table.native_key(key)] = value

        if table.keep_extra:
            for key, value in server.extra.items():
                out.setdefault(key, value)
        return out

    def import_server(self, name: str, raw: dict[str, Any]) -> MCPServerDTO:
        transport = self._format.transport_for_tag(raw.get("type"))
        if transport is None:
            transport = self._infer_native_transport(raw)
        if transport is None:
            raise ValueError("cannot determine transport")
        table = self._format.for_transport(transport)

        canonical: dict[str, Any] = {"type": transport.value}
        for key, value in raw.items():
            if key == "type":
                continue
            canonical_key = table.canonical_key(key)
            if table.joined_command and canonical_key == "command":
                if isinstance(value, list):
                    parts = [str(item) for item in value]
                    canonical["command"] = parts[0] if parts else ""
                    canonical["args"] = parts[1:]
                    continue
            canonical[canonical_key] = value
        return server_from_canonical(name, canonical)

    def _infer_native_transport(self, raw: dict[str, Any]) -> MCPTransport | None:
        stdio = self._format.stdio
        command = raw.get(stdio.native_key("command"))
        if isinstance(command, str) or (stdio.joined_command and isinstance(command, list)):
            return MCPTransport.STDIO
        if isinstance(raw.get(self._format.http.native_key("url")), str):
            return MCPTransport.HTTP
        return infer_transport({k: v for k, v in raw.items() if k != "type"})
