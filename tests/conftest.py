"""Shared test fixtures."""

import json
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml

from mathcheck.infrastructure.engine import AgentOutput
from mathcheck.models.config import AgentConfig, PipelineConfig
from mathcheck.models.message import Task
from mathcheck.models.trajectory import TokenUsage


@pytest.fixture
def token_usage() -> TokenUsage:
    """Create mock token usage."""
    return TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=150)


@pytest.fixture
def make_tool_call():
    """Factory for LiteLLM-shaped tool call objects."""

    def _make(call_id: str, name: str, arguments: dict | str) -> SimpleNamespace:
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        return SimpleNamespace(
            id=call_id,
            type="function",
            function=SimpleNamespace(name=name, arguments=arguments),
        )

    return _make


@pytest.fixture
def make_reply():
    """Factory for LiteLLM-shaped assistant messages."""

    def _make(content: str | None = None, tool_calls: list | None = None) -> SimpleNamespace:
        return SimpleNamespace(role="assistant", content=content, tool_calls=tool_calls)

    return _make


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    """Create a test pipeline configuration without trajectory output."""
    return PipelineConfig(
        worker=AgentConfig(
            role="worker",
            model="gpt-4o",
            system_prompt="You are a worker.",
        ),
        verifier=AgentConfig(
            role="verifier",
            model="gpt-4o-mini",
            system_prompt="You are a verifier.",
        ),
        question="What is 2 + 2?",
        config_version="test-v1.0",
    )


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Create a minimal pipeline.yaml in tmp_path.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the config file
    """
    config_data = {
        "config_version": "test-v1.0",
        "trajectory_output_dir": str(tmp_path / "trajectories"),
        "question": "What is 2 + 2?",
        "worker": {
            "role": "worker",
            "model": "gpt-4o",
            "temperature": 0.0,
            "max_tokens": 512,
            "system_prompt": "You are a worker.",
        },
        "verifier": {
            "role": "verifier",
            "model": "gpt-4o-mini",
            "temperature": 0.0,
            "max_tokens": 512,
            "memory_window": 4,
            "system_prompt": "You are a verifier.",
        },
    }

    config_path = tmp_path / "test_pipeline.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)

    return config_path


class ScriptedEngine:
    """Engine double that returns canned responses and records its tasks."""

    def __init__(self, responses: list[str], events: list[str] | None = None, name: str = "engine"):
        self.responses = list(responses)
        self.tasks: list[Task] = []
        self.events = events if events is not None else []
        self.name = name

    async def run(self, task: Task) -> AgentOutput:
        self.events.append(self.name)
        self.tasks.append(task)
        return AgentOutput(
            response=self.responses.pop(0),
            token_usage=TokenUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
        )


@pytest.fixture
def scripted_engine():
    """Factory for ScriptedEngine instances."""
    return ScriptedEngine


@pytest.fixture
def mock_litellm(make_reply, make_tool_call, token_usage):
    """Patch the pipeline's LLMClient to replay a 2 + 2 conversation.

    The worker calls calculate("2 + 2"), then answers {"value": 4}; the
    verifier answers with a fenced JSON verdict.
    """
    replies = [
        (make_reply(tool_calls=[make_tool_call("call_1", "calculate", {"expression": "2 + 2"})]), token_usage),
        (make_reply(content='{"value": 4}'), token_usage),
        (
            make_reply(
                content='Here you go:\n```json\n{"is_correct": true, "issues": [], "final_answer": "4"}\n```'
            ),
            token_usage,
        ),
    ]

    with patch("mathcheck.orchestration.pipeline.LLMClient") as mock_llm_client:
        mock_client = MagicMock()
        mock_client.complete = AsyncMock(side_effect=replies)
        mock_llm_client.return_value = mock_client
        yield mock_client
