"""Base agent class for worker and verifier agents."""

from abc import ABC

from mathcheck.infrastructure.engine import AgentOutput, ReasoningEngine
from mathcheck.models.config import AgentConfig
from mathcheck.models.message import Task


class BaseAgent(ABC):
    """Abstract base class for all agents."""

    role: str

    def __init__(self, config: AgentConfig, engine: ReasoningEngine) -> None:
        """Initialize base agent.

        Args:
            config: Agent configuration
            engine: Reasoning engine that runs this agent's tasks

        Raises:
            ValueError: If config.role does not match the agent class
        """
        if config.role != self.role:
            raise ValueError(
                f"{type(self).__name__} requires role='{self.role}', got '{config.role}'"
            )
        self.config = config
        self.engine = engine

    @property
    def model(self) -> str:
        """Get model identifier for cost tracking.

        Returns:
            Model identifier string
        """
        return self.config.model

    async def _run(self, prompt: str) -> AgentOutput:
        return await self.engine.run(Task(prompt=prompt))
