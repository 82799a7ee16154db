from automatic.agents.common.framework import (
    RegisteredAgent,
    all_agents,
    create_registered_agent,
    list_registered_agents,
)
from automatic.agents.common.interfaces.agent import IAgent
from automatic.agents.common.models import MCPServerDTO, MCPTransport

__all__ = [
    "IAgent",
    "MCPServerDTO",
    "MCPTransport",
    "RegisteredAgent",
    "all_agents",
    "create_registered_agent",
    "list_registered_agents",
]
