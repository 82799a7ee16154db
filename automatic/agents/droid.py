from automatic.agents.agent_id import AgentId
from automatic.agents.common.formats import (
    STANDARD_IMPORT_TAGS,
    STRIPPED_STDIO_FIELDS,
    McpFormat,
    TransportFormat,
)
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.mapper import TableMCPMapper
from automatic.agents.common.repositories import JsonConfigRepository

# Factory Droid requires an explicit "stdio" tag and only knows "http" for
# remote servers, so SSE entries come back as HTTP.
DROID_FORMAT = McpFormat(
    stdio=TransportFormat(tag="stdio", dropped=STRIPPED_STDIO_FIELDS),
    http=TransportFormat(tag="http"),
    sse=TransportFormat(tag="http"),
    import_tags=STANDARD_IMPORT_TAGS,
)


class DroidAgent(RegisteredAgent):
    AGENT_ID = AgentId.DROID

    @classmethod
    def create_default(cls) -> "DroidAgent":
        return cls(
            repository=JsonConfigRepository(cls.default_config_file()),
            mapper=TableMCPMapper(DROID_FORMAT),
        )
