from automatic.agents.agent_id import AgentId
from automatic.agents.common.formats import STANDARD_FORMAT
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.mapper import TableMCPMapper
from automatic.agents.common.repositories import JsonConfigRepository


class CursorAgent(RegisteredAgent):
    AGENT_ID = AgentId.CURSOR

    @classmethod
    def create_default(cls) -> "CursorAgent":
        return cls(
            repository=JsonConfigRepository(cls.default_config_file()),
            mapper=TableMCPMapper(STANDARD_FORMAT),
        )
