"""Pipeline orchestration for the worker → verifier sequence."""

from collections.abc import Sequence
from contextlib import nullcontext
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from mathcheck.agents import VerifierAgent, WorkerAgent
from mathcheck.agents.prompts import build_verification_prompt, build_worker_system_prompt
from mathcheck.infrastructure.cost_tracker import CostTracker
from mathcheck.infrastructure.engine import ReActEngine, ReasoningEngine
from mathcheck.infrastructure.llm_client import LLMClient
from mathcheck.infrastructure.trajectory_logger import TrajectoryLogger
from mathcheck.models.answer import Verdict, WorkerAnswer
from mathcheck.models.config import AgentConfig, PipelineConfig
from mathcheck.models.trajectory import TokenUsage
from mathcheck.parsing.json_extract import extract_and_format_json, parse_verdict
from mathcheck.tools.base import Tool
from mathcheck.tools.calculator import CalculatorTool


class PipelineState(str, Enum):
    """Stages of a pipeline run, entered strictly in order."""

    RUN_WORKER = "run_worker"
    RUN_VERIFIER = "run_verifier"
    DONE = "done"


class PipelineResult(BaseModel):
    """Result of a complete pipeline run."""

    question: str
    worker_response: str
    worker_answer: WorkerAnswer
    coercion_defaulted: bool
    verification_prompt: str
    verifier_response: str
    verdict_text: str
    verdict: Verdict | None = None
    token_usage: TokenUsage
    total_cost: float
    cost_summary: dict[str, Any]
    trajectory_path: str | None = None


def _build_engine(
    config: AgentConfig, system_prompt: str, tools: Sequence[Tool]
) -> ReActEngine:
    client = LLMClient(
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )
    return ReActEngine(
        client,
        system_prompt=system_prompt,
        tools=tools,
        memory_window=config.memory_window,
        max_turns=config.max_turns,
        name=config.role,
    )


class VerificationPipeline:
    """Runs the worker, then the verifier on the worker's answer."""

    def __init__(
        self,
        config: PipelineConfig,
        worker_engine: ReasoningEngine | None = None,
        verifier_engine: ReasoningEngine | None = None,
    ) -> None:
        """Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration
            worker_engine: Engine for the worker; built from config (with the
                calculate tool) when omitted
            verifier_engine: Engine for the verifier; built from config
                (no tools) when omitted
        """
        self.config = config

        if worker_engine is None:
            worker_engine = _build_engine(
                config.worker,
                build_worker_system_prompt(config.worker.system_prompt),
                [CalculatorTool()],
            )
        if verifier_engine is None:
            verifier_engine = _build_engine(config.verifier, config.verifier.system_prompt, [])

        self.worker = WorkerAgent(config.worker, worker_engine)
        self.verifier = VerifierAgent(config.verifier, verifier_engine)

        self.config_hash = config.config_hash()
        self.state: PipelineState | None = None

    def _enter(self, state: PipelineState) -> None:
        logger.info(f"Pipeline state: {self.state.value if self.state else 'start'} -> {state.value}")
        self.state = state

    def _fail(
        self, agent: str, action: str, error: Exception, traj: TrajectoryLogger | None
    ) -> None:
        logger.error(f"{agent.capitalize()} failed: {error}")
        if traj is not None:
            traj.log_error(agent=agent, action=action, error=error)

    async def run(self, question: str | None = None) -> PipelineResult:
        """Run worker then verifier on one question.

        Args:
            question: The word problem; defaults to config.question

        Returns:
            PipelineResult with the verdict text and intermediate artifacts

        Raises:
            Exception: Any engine failure, re-raised after logging
        """
        question = question if question is not None else self.config.question
        self.state = None

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        run_id = f"run_{timestamp}_{self.config_hash}"
        logger.info(f"Starting pipeline run: {run_id}")

        trajectory_path: Path | None = None
        if self.config.trajectory_output_dir:
            trajectory_path = Path(self.config.trajectory_output_dir) / f"{run_id}.jsonl"

        cost_tracker = CostTracker()
        traj_context = (
            TrajectoryLogger(trajectory_path, run_id, self.config_hash)
            if trajectory_path is not None
            else nullcontext()
        )

        with traj_context as traj:
            # WORKER STEP
            self._enter(PipelineState.RUN_WORKER)
            try:
                coercion, worker_output = await self.worker.solve(question)
            except Exception as e:
                self._fail("worker", "solve", e, traj)
                raise

            answer = coercion.answer
            if coercion.defaulted:
                logger.warning(
                    f"Worker output was not a valid answer, using default value={answer.value}"
                )
            logger.info(f"Worker returns: {answer.value}")
            cost = cost_tracker.add_usage(
                model=self.worker.model, usage=worker_output.token_usage, agent="worker"
            )
            logger.info(f"Worker cost: ${cost:.6f}")

            if traj is not None:
                traj.log_worker(question, coercion, worker_output, model=self.worker.model)

            # VERIFIER STEP
            self._enter(PipelineState.RUN_VERIFIER)
            verification_prompt = build_verification_prompt(question, answer.value)
            try:
                verifier_output = await self.verifier.verify(verification_prompt)
            except Exception as e:
                self._fail("verifier", "verify", e, traj)
                raise

            cost = cost_tracker.add_usage(
                model=self.verifier.model, usage=verifier_output.token_usage, agent="verifier"
            )
            logger.info(f"Verifier cost: ${cost:.6f}")

            self._enter(PipelineState.DONE)
            verdict_text = extract_and_format_json(verifier_output.response)
            verdict = parse_verdict(verdict_text)

            if traj is not None:
                traj.log_verifier(
                    verification_prompt,
                    verifier_output,
                    verdict_text,
                    verdict,
                    model=self.verifier.model,
                )

        result = PipelineResult(
            question=question,
            worker_response=worker_output.response,
            worker_answer=answer,
            coercion_defaulted=coercion.defaulted,
            verification_prompt=verification_prompt,
            verifier_response=verifier_output.response,
            verdict_text=verdict_text,
            verdict=verdict,
            token_usage=cost_tracker.total_tokens(),
            total_cost=cost_tracker.total_cost(),
            cost_summary=cost_tracker.summary(),
            trajectory_path=str(trajectory_path) if trajectory_path else None,
        )

        logger.info(
            f"Pipeline complete: value={answer.value}, "
            f"verdict={'parsed' if verdict else 'raw'}, cost=${result.total_cost:.6f}"
        )
        return result
