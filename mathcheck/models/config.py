"""Configuration models for agents and pipeline."""

import hashlib
import json
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "gpt-4o"

DEFAULT_QUESTION = (
    "A stock price increases by 40% on Monday, then decreases by 40% on Tuesday. "
    "If it started at $100, what is the final price?"
)

WORKER_SYSTEM_PROMPT = "Solve basic math using the calculate tool and return the result."

VERIFIER_SYSTEM_PROMPT = (
    "You solve math problems. "
    "Solve independently, compare to provided answer. "
    "Report AGREE or DISAGREE with explanation."
)


class AgentConfig(BaseModel):
    """Configuration for worker and verifier agents."""

    role: Literal["worker", "verifier"]
    model: str = DEFAULT_MODEL
    temperature: float = 0.0
    max_tokens: int = 4096
    system_prompt: str = ""
    memory_window: int = Field(default=10, ge=1)
    max_turns: int = Field(default=10, ge=1, le=50)


class PipelineConfig(BaseSettings):
    """Pipeline configuration; MATHCHECK_* environment variables override defaults."""

    model_config = SettingsConfigDict(
        env_prefix="MATHCHECK_",
        env_file=".env",
        extra="ignore",
    )

    worker: AgentConfig
    verifier: AgentConfig
    question: str = DEFAULT_QUESTION
    trajectory_output_dir: str | None = None
    config_version: str

    def config_hash(self) -> str:
        """Generate deterministic hash of configuration.

        Returns:
            First 8 characters of SHA256 hash of config JSON.
        """
        config_dict = self.model_dump()
        config_json = json.dumps(config_dict, sort_keys=True)
        hash_obj = hashlib.sha256(config_json.encode("utf-8"))
        return hash_obj.hexdigest()[:8]


def default_config(model: str = DEFAULT_MODEL) -> PipelineConfig:
    """Build the stock two-agent configuration.

    Args:
        model: Model identifier used by both agents

    Returns:
        PipelineConfig with worker and verifier on the same model
    """
    return PipelineConfig(
        worker=AgentConfig(role="worker", model=model, system_prompt=WORKER_SYSTEM_PROMPT),
        verifier=AgentConfig(
            role="verifier", model=model, system_prompt=VERIFIER_SYSTEM_PROMPT
        ),
        config_version="1.0",
    )
