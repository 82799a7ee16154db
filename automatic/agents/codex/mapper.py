from automatic.agents.common.formats import (
    STANDARD_IMPORT_TAGS,
    STRIPPED_STDIO_FIELDS,
    McpFormat,
    TransportFormat,
)
from automatic.agents.common.mapper import TableMCPMapper

_REMOTE_DROPPED = frozenset({"enabled", "timeout", "oauth"})

CODEX_FORMAT = McpFormat(
    stdio=TransportFormat(tag=None, dropped=STRIPPED_STDIO_FIELDS, keep_extra=False),
    http=TransportFormat(
        tag="http",
        dropped=_REMOTE_DROPPED,
        renames={"headers": "http_headers"},
        keep_extra=False,
    ),
    sse=TransportFormat(
        tag="sse",
        dropped=_REMOTE_DROPPED,
        renames={"headers": "http_headers"},
        keep_extra=False,
    ),
    import_tags=STANDARD_IMPORT_TAGS,
)


class CodexMCPMapper(TableMCPMapper):
    FORMAT = CODEX_FORMAT
