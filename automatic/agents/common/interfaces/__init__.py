from automatic.agents.common.interfaces.agent import IAgent
from automatic.agents.common.interfaces.mapper import IAgentMCPMapper
from automatic.agents.common.interfaces.repositories import IAgentConfigRepository

__all__ = [
    "IAgent",
    "IAgentConfigRepository",
    "IAgentMCPMapper",
]
