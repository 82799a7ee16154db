from automatic.agents.common.formats import McpFormat, TransportFormat
from automatic.agents.common.mapper import TableMCPMapper
from automatic.agents.common.models import MCPTransport

# OpenCode writes a fresh object per server: unknown keys are not carried,
# "enabled" is only spelled out when a server is switched off, and both
# remote transports share the "remote" tag.
_LOCAL = TransportFormat(
    tag="local",
    renames={"env": "environment"},
    omit_when={"enabled": True},
    joined_command=True,
    keep_extra=False,
)
_REMOTE = TransportFormat(
    tag="remote",
    omit_when={"enabled": True},
    keep_extra=False,
)

OPENCODE_FORMAT = McpFormat(
    stdio=_LOCAL,
    http=_REMOTE,
    sse=_REMOTE,
    import_tags={"local": MCPTransport.STDIO, "remote": MCPTransport.HTTP},
)


class OpenCodeMCPMapper(TableMCPMapper):
    FORMAT = OPENCODE_FORMAT
