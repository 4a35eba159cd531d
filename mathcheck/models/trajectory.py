"""Trajectory logging models."""

from typing import Any

from pydantic import BaseModel


class TokenUsage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


class TrajectoryEntry(BaseModel):
    """A single entry in the trajectory log."""

    timestamp: str
    run_id: str
    step_id: int
    agent: str
    action: str
    input: dict[str, Any]
    output: dict[str, Any]
    metadata: dict[str, Any]
