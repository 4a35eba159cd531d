"""Agent implementations for worker and verifier."""

from mathcheck.agents.prompts import (
    build_verification_prompt,
    build_worker_system_prompt,
    format_number,
)
from mathcheck.agents.verifier import VerifierAgent
from mathcheck.agents.worker import WorkerAgent

__all__ = [
    "WorkerAgent",
    "VerifierAgent",
    "build_verification_prompt",
    "build_worker_system_prompt",
    "format_number",
]
