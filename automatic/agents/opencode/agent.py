from automatic.agents.agent_id import AgentId
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.opencode.config_repository import OpenCodeConfigRepository
from automatic.agents.opencode.mapper import OpenCodeMCPMapper


class OpenCodeAgent(RegisteredAgent):
    AGENT_ID = AgentId.OPENCODE

    @classmethod
    def create_default(cls) -> "OpenCodeAgent":
        return cls(
            repository=OpenCodeConfigRepository(cls.default_config_file()),
            mapper=OpenCodeMCPMapper(),
        )
