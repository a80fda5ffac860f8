from metrotrade.agents.base import Agent
from metrotrade.agents.learning import (
    Action,
    AgentFactory,
    Features,
    LearningAgent,
    discretize,
    learning_agents,
    storage_key,
)

__all__ = [
    "Agent",
    "Action",
    "AgentFactory",
    "Features",
    "LearningAgent",
    "discretize",
    "learning_agents",
    "storage_key",
]
