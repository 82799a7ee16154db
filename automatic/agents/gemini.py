from automatic.agents.agent_id import AgentId
from automatic.agents.common.formats import STANDARD_FORMAT
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.mapper import TableMCPMapper
from automatic.agents.common.repositories import JsonConfigRepository


class GeminiAgent(RegisteredAgent):
    # .gemini/settings.json is the CLI's general settings file
    AGENT_ID = AgentId.GEMINI

    @classmethod
    def create_default(cls) -> "GeminiAgent":
        return cls(
            repository=JsonConfigRepository(cls.default_config_file(), shared=True),
            mapper=TableMCPMapper(STANDARD_FORMAT),
        )
