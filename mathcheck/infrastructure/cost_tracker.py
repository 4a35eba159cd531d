"""Cost tracker for LLM API usage."""

from typing import Any

from mathcheck.models.trajectory import TokenUsage


class CostTracker:
    """Track token usage and costs across the agents of one run."""

    # Cost rates per 1K tokens (input, output) in USD
    DEFAULT_RATES = {
        "gpt-4o": (0.0025, 0.01),  # $2.50/$10 per 1M tokens
        "gpt-4o-mini": (0.00015, 0.0006),  # $0.15/$0.60 per 1M tokens
        "gpt-4.1": (0.002, 0.008),
        "gpt-4.1-mini": (0.0004, 0.0016),
    }

    def __init__(self, custom_rates: dict[str, tuple[float, float]] | None = None) -> None:
        """Initialize cost tracker.

        Args:
            custom_rates: Optional dict of model -> (input_rate, output_rate) per 1K tokens
        """
        self.rates = {**self.DEFAULT_RATES}
        if custom_rates:
            self.rates.update(custom_rates)

        self.usage_by_model: dict[str, TokenUsage] = {}
        self.usage_by_agent: dict[str, TokenUsage] = {}
        self.cost_by_model: dict[str, float] = {}
        self.cost_by_agent: dict[str, float] = {}

    def _rate_for(self, model: str) -> tuple[float, float] | None:
        # LiteLLM ids may carry a provider prefix, e.g. "openai/gpt-4o"
        if model in self.rates:
            return self.rates[model]
        return self.rates.get(model.rsplit("/", 1)[-1])

    def add_usage(
        self, model: str, usage: TokenUsage, agent: str | None = None
    ) -> float:
        """Add token usage and calculate cost.

        Args:
            model: Model identifier
            usage: Token usage data
            agent: Optional agent identifier for per-agent tracking

        Returns:
            Cost in USD for this usage
        """
        rate = self._rate_for(model)
        if rate is not None:
            input_rate, output_rate = rate
            cost = (
                (usage.prompt_tokens / 1000.0) * input_rate
                + (usage.completion_tokens / 1000.0) * output_rate
            )
        else:
            # Unknown model, use conservative estimate
            cost = (usage.total_tokens / 1000.0) * 0.01

        self.usage_by_model[model] = self.usage_by_model.get(model, TokenUsage()) + usage
        self.cost_by_model[model] = self.cost_by_model.get(model, 0.0) + cost

        if agent:
            self.usage_by_agent[agent] = self.usage_by_agent.get(agent, TokenUsage()) + usage
            self.cost_by_agent[agent] = self.cost_by_agent.get(agent, 0.0) + cost

        return cost

    def total_cost(self) -> float:
        """Get total accumulated cost in USD.

        Returns:
            Total cost across all models and agents
        """
        return sum(self.cost_by_model.values())

    def total_tokens(self) -> TokenUsage:
        """Get total accumulated token usage.

        Returns:
            TokenUsage summed across all models
        """
        total = TokenUsage()
        for usage in self.usage_by_model.values():
            total = total + usage
        return total

    def summary(self) -> dict[str, Any]:
        """Get detailed cost and usage summary.

        Returns:
            Dict with breakdown by model and agent
        """
        return {
            "total_cost_usd": self.total_cost(),
            "total_tokens": self.total_tokens().model_dump(),
            "by_model": {
                model: {
                    "tokens": usage.model_dump(),
                    "cost_usd": self.cost_by_model[model],
                }
                for model, usage in self.usage_by_model.items()
            },
            "by_agent": {
                agent: {
                    "tokens": usage.model_dump(),
                    "cost_usd": self.cost_by_agent[agent],
                }
                for agent, usage in self.usage_by_agent.items()
            },
        }
