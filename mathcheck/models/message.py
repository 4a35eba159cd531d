"""Message and task models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """An immutable prompt submitted to an agent."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(min_length=1)


class Message(BaseModel):
    """A single chat message in LiteLLM/OpenAI wire shape."""

    role: Literal["system", "user", "assistant", "tool"]
    content: str | None = None
    tool_calls: list[dict[str, Any]] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    def to_litellm(self) -> dict[str, Any]:
        """Serialize for an acompletion call, dropping unset fields.

        Returns:
            Message dict
        """
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = self.tool_calls
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.name is not None:
            data["name"] = self.name
        return data
