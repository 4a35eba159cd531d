"""Data models for the worker/verifier pipeline."""

from mathcheck.models.answer import (
    DEFAULT_WORKER_ANSWER,
    CoercionResult,
    Defaulted,
    Parsed,
    Verdict,
    WorkerAnswer,
)
from mathcheck.models.config import AgentConfig, PipelineConfig, default_config
from mathcheck.models.message import Message, Task
from mathcheck.models.trajectory import TokenUsage, TrajectoryEntry

__all__ = [
    "AgentConfig",
    "PipelineConfig",
    "default_config",
    "Message",
    "Task",
    "TrajectoryEntry",
    "TokenUsage",
    "WorkerAnswer",
    "DEFAULT_WORKER_ANSWER",
    "Parsed",
    "Defaulted",
    "CoercionResult",
    "Verdict",
]
