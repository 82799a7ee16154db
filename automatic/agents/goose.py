from automatic.agents.agent_id import AgentId
from automatic.agents.common.formats import STANDARD_FORMAT
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.mapper import TableMCPMapper
from automatic.agents.common.repositories import JsonConfigRepository


class GooseAgent(RegisteredAgent):
    AGENT_ID = AgentId.GOOSE

    @classmethod
    def create_default(cls) -> "GooseAgent":
        return cls(
            repository=JsonConfigRepository(cls.default_config_file()),
            mapper=TableMCPMapper(STANDARD_FORMAT),
        )
