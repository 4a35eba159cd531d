"""Typed agent outputs: worker answer, coercion outcome, verdict."""

from typing import Literal

from pydantic import BaseModel, Field


class WorkerAnswer(BaseModel):
    """The worker's final numeric answer."""

    value: float = Field(description="The result value")


DEFAULT_WORKER_ANSWER = WorkerAnswer(value=0)


class Parsed(BaseModel):
    """Worker output parsed cleanly into a WorkerAnswer."""

    kind: Literal["parsed"] = "parsed"
    answer: WorkerAnswer

    @property
    def defaulted(self) -> bool:
        return False


class Defaulted(BaseModel):
    """Worker output could not be parsed; the default answer stands in."""

    kind: Literal["defaulted"] = "defaulted"
    raw_text: str
    reason: str
    answer: WorkerAnswer = Field(default_factory=lambda: DEFAULT_WORKER_ANSWER.model_copy())

    @property
    def defaulted(self) -> bool:
        return True


CoercionResult = Parsed | Defaulted


class Verdict(BaseModel):
    """Verifier's judgment of the worker answer."""

    is_correct: bool
    issues: list[str]
    final_answer: str
