"""Infrastructure services for the worker/verifier pipeline."""

from mathcheck.infrastructure.cost_tracker import CostTracker
from mathcheck.infrastructure.engine import (
    AgentOutput,
    EngineInvocationError,
    ReActEngine,
    ReasoningEngine,
    ToolInvocation,
)
from mathcheck.infrastructure.llm_client import LLMClient
from mathcheck.infrastructure.memory import SlidingWindowMemory
from mathcheck.infrastructure.trajectory_logger import TrajectoryLogger

__all__ = [
    "LLMClient",
    "ReActEngine",
    "ReasoningEngine",
    "AgentOutput",
    "ToolInvocation",
    "EngineInvocationError",
    "SlidingWindowMemory",
    "TrajectoryLogger",
    "CostTracker",
]
