"""Verifier agent that independently re-solves and judges an answer."""

from mathcheck.agents.base import BaseAgent
from mathcheck.infrastructure.engine import AgentOutput


class VerifierAgent(BaseAgent):
    """Agent that validates the worker's answer.

    It only ever receives the rendered verification prompt, never the
    worker's conversation.
    """

    role = "verifier"

    async def verify(self, verification_prompt: str) -> AgentOutput:
        """Run the verification prompt.

        Args:
            verification_prompt: Output of build_verification_prompt

        Returns:
            Raw verifier output
        """
        return await self._run(verification_prompt)
