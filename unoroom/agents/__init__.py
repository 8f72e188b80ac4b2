"""Built-in agents."""

from unoroom.agents.protocol import AgentProtocol
from unoroom.agents.random_agent import RandomAgent
from unoroom.agents.human_agent import HumanAgent

__all__ = ["AgentProtocol", "RandomAgent", "HumanAgent"]
