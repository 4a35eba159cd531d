"""Async LLM client over LiteLLM."""

from typing import Any

from litellm import acompletion
from loguru import logger

from mathcheck.models.trajectory import TokenUsage


class LLMClient:
    """Async LLM client with optional tool declarations."""

    def __init__(
        self, model: str, temperature: float = 0.0, max_tokens: int = 4096
    ) -> None:
        """Initialize LLM client.

        Args:
            model: Model identifier (e.g., "gpt-4o")
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum tokens to generate
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
    ) -> tuple[Any, TokenUsage]:
        """Request one chat completion, possibly with tool calls.

        There is no retry here: transport, auth and quota errors from
        LiteLLM propagate to the caller.

        Args:
            messages: Full message list in OpenAI shape
            tools: Optional tool declarations

        Returns:
            Tuple of (assistant message object, token usage)
        """
        logger.info(
            f"LLM call: model={self.model}, messages={len(messages)}, "
            f"tools={len(tools) if tools else 0}"
        )

        kwargs: dict[str, Any] = {}
        if tools:
            kwargs["tools"] = tools

        response = await acompletion(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            **kwargs,
        )

        message = response.choices[0].message
        usage = getattr(response, "usage", None)
        token_usage = TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )

        logger.info(
            f"LLM response: tokens={token_usage.total_tokens} "
            f"(prompt={token_usage.prompt_tokens}, "
            f"completion={token_usage.completion_tokens})"
        )

        return message, token_usage
