"""Worker agent that solves the question with the calculate tool."""

from mathcheck.agents.base import BaseAgent
from mathcheck.infrastructure.engine import AgentOutput
from mathcheck.models.answer import CoercionResult
from mathcheck.parsing.coercion import coerce_worker_output


class WorkerAgent(BaseAgent):
    """Agent that produces a numeric answer to a word problem."""

    role = "worker"

    async def solve(self, question: str) -> tuple[CoercionResult, AgentOutput]:
        """Solve the question and coerce the reply into a WorkerAnswer.

        Args:
            question: The word problem

        Returns:
            Tuple of (coercion outcome, raw agent output)
        """
        output = await self._run(question)
        return coerce_worker_output(output.response), output
