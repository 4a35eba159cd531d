"""JSONL record of the worker and verifier stages of one pipeline run."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from mathcheck.infrastructure.engine import AgentOutput
from mathcheck.models.answer import CoercionResult, Defaulted, Verdict
from mathcheck.models.trajectory import TrajectoryEntry


def _run_metadata(model: str, output: AgentOutput) -> dict[str, Any]:
    return {
        "model": model,
        "turns": output.turns,
        "tokens": output.token_usage.model_dump(),
    }


class TrajectoryLogger:
    """Appends one TrajectoryEntry per pipeline stage to a JSONL file.

    Use as a context manager; entries are flushed as they are written so a
    failed run still leaves the stages that completed.
    """

    def __init__(self, output_path: Path, run_id: str, config_hash: str) -> None:
        self.output_path = output_path
        self.run_id = run_id
        self.config_hash = config_hash
        self.step_counter = 0
        self._handle: TextIO | None = None

    def __enter__(self) -> "TrajectoryLogger":
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.output_path.open("a", encoding="utf-8")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._handle:
            self._handle.close()
            self._handle = None

    def _write(
        self,
        agent: str,
        action: str,
        input_data: dict[str, Any],
        output_data: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if not self._handle:
            raise RuntimeError("TrajectoryLogger not opened (use context manager)")

        self.step_counter += 1
        entry = TrajectoryEntry(
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            run_id=self.run_id,
            step_id=self.step_counter,
            agent=agent,
            action=action,
            input=input_data,
            output=output_data,
            metadata={"config_hash": self.config_hash, **(metadata or {})},
        )
        self._handle.write(entry.model_dump_json() + "\n")
        self._handle.flush()

    def log_worker(
        self, question: str, coercion: CoercionResult, output: AgentOutput, model: str
    ) -> None:
        """Record the worker stage: raw reply, coerced value and tool calls.

        Args:
            question: Question the worker was asked
            coercion: Outcome of coercing the worker's reply
            output: Raw engine output for the worker run
            model: Worker model id
        """
        output_data: dict[str, Any] = {
            "response": output.response,
            "value": coercion.answer.value,
            "coercion": coercion.kind,
            "tool_calls": [call.model_dump() for call in output.tool_calls],
        }
        if isinstance(coercion, Defaulted):
            output_data["default_reason"] = coercion.reason

        self._write(
            agent="worker",
            action="solve",
            input_data={"question": question},
            output_data=output_data,
            metadata=_run_metadata(model, output),
        )

    def log_verifier(
        self,
        prompt: str,
        output: AgentOutput,
        verdict_text: str,
        verdict: Verdict | None,
        model: str,
    ) -> None:
        """Record the verifier stage: prompt, raw reply and extracted verdict.

        Args:
            prompt: Verification prompt sent to the verifier
            output: Raw engine output for the verifier run
            verdict_text: Normalized verdict text (or the raw reply on fallback)
            verdict: Typed verdict, if the text was verdict-shaped JSON
            model: Verifier model id
        """
        self._write(
            agent="verifier",
            action="verify",
            input_data={"prompt": prompt},
            output_data={
                "response": output.response,
                "verdict_text": verdict_text,
                "verdict": verdict.model_dump() if verdict else None,
            },
            metadata=_run_metadata(model, output),
        )

    def log_error(self, agent: str, action: str, error: Exception) -> None:
        """Record a stage that failed with an exception."""
        self._write(
            agent=agent,
            action=action,
            input_data={},
            output_data={
                "error": True,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
        )
