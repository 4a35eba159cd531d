"""Tests for data models."""

import pytest
from pydantic import ValidationError

from mathcheck.models.answer import DEFAULT_WORKER_ANSWER, Defaulted, Parsed, WorkerAnswer
from mathcheck.models.config import (
    DEFAULT_QUESTION,
    AgentConfig,
    PipelineConfig,
    default_config,
)
from mathcheck.models.message import Message, Task
from mathcheck.models.trajectory import TokenUsage


def test_agent_config_role_validation():
    """Test AgentConfig validates role constraint (worker/verifier only)."""
    assert AgentConfig(role="worker").role == "worker"
    assert AgentConfig(role="verifier").role == "verifier"

    with pytest.raises(ValidationError):
        AgentConfig(role="judge")  # type: ignore


def test_agent_config_defaults():
    config = AgentConfig(role="worker")
    assert config.model == "gpt-4o"
    assert config.memory_window == 10
    assert config.max_turns == 10

    with pytest.raises(ValidationError):
        AgentConfig(role="worker", memory_window=0)


def test_pipeline_config_hash_deterministic():
    """Test PipelineConfig.config_hash() is deterministic and content-sensitive."""
    config1 = default_config()
    config2 = default_config()
    config3 = default_config(model="gpt-4o-mini")

    assert config1.config_hash() == config2.config_hash()
    assert len(config1.config_hash()) == 8
    assert config1.config_hash() != config3.config_hash()


def test_default_config():
    config = default_config()
    assert config.question == DEFAULT_QUESTION
    assert config.worker.role == "worker"
    assert config.verifier.role == "verifier"
    assert "calculate tool" in config.worker.system_prompt
    assert "AGREE or DISAGREE" in config.verifier.system_prompt
    assert config.trajectory_output_dir is None


def test_pipeline_config_requires_agents():
    with pytest.raises(ValidationError):
        PipelineConfig(config_version="1.0")  # type: ignore


def test_task_is_immutable_and_non_empty():
    task = Task(prompt="What is 2 + 2?")
    with pytest.raises(ValidationError):
        task.prompt = "changed"  # type: ignore
    with pytest.raises(ValidationError):
        Task(prompt="")


def test_message_to_litellm_drops_unset_fields():
    assert Message(role="user", content="hi").to_litellm() == {"role": "user", "content": "hi"}
    assert Message(role="tool", content="4.0", tool_call_id="c1", name="calculate").to_litellm() == {
        "role": "tool",
        "content": "4.0",
        "tool_call_id": "c1",
        "name": "calculate",
    }


def test_token_usage_addition():
    a = TokenUsage(prompt_tokens=1, completion_tokens=2, total_tokens=3)
    b = TokenUsage(prompt_tokens=10, completion_tokens=20, total_tokens=30)
    assert a + b == TokenUsage(prompt_tokens=11, completion_tokens=22, total_tokens=33)


def test_coercion_branches_share_answer_interface():
    parsed = Parsed(answer=WorkerAnswer(value=0))
    defaulted = Defaulted(raw_text="oops", reason="invalid json")

    # same value downstream, distinguishable by branch
    assert parsed.answer == defaulted.answer == DEFAULT_WORKER_ANSWER
    assert (parsed.kind, defaulted.kind) == ("parsed", "defaulted")
    assert not parsed.defaulted and defaulted.defaulted


def test_defaulted_answer_not_shared():
    first = Defaulted(raw_text="a", reason="r")
    first.answer.value = 99.0
    assert Defaulted(raw_text="b", reason="r").answer.value == 0.0


def test_unprefixed_environment_is_ignored(monkeypatch):
    monkeypatch.setenv("QUESTION", "What is 1 + 1?")
    monkeypatch.setenv("TRAJECTORY_OUTPUT_DIR", "/tmp/elsewhere")

    config = default_config()

    assert config.question == DEFAULT_QUESTION
    assert config.trajectory_output_dir is None


def test_prefixed_environment_overrides_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("MATHCHECK_QUESTION", "What is 1 + 1?")
    monkeypatch.setenv("MATHCHECK_TRAJECTORY_OUTPUT_DIR", str(tmp_path))

    config = default_config()

    assert config.question == "What is 1 + 1?"
    assert config.trajectory_output_dir == str(tmp_path)
