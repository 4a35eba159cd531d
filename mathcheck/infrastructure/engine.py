"""ReAct-style reasoning engine: alternate model turns and tool calls."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from loguru import logger
from pydantic import BaseModel, Field

from mathcheck.infrastructure.llm_client import LLMClient
from mathcheck.infrastructure.memory import SlidingWindowMemory
from mathcheck.models.message import Message, Task
from mathcheck.models.trajectory import TokenUsage
from mathcheck.tools.base import Tool, ToolResult


class EngineInvocationError(RuntimeError):
    """The reasoning engine could not produce an answer (transport, auth, turn limit)."""


class ToolInvocation(BaseModel):
    """One tool call made during an agent run."""

    call_id: str
    name: str
    arguments: str
    result: ToolResult


class AgentOutput(BaseModel):
    """Raw outcome of an agent run."""

    response: str
    tool_calls: list[ToolInvocation] = Field(default_factory=list)
    token_usage: TokenUsage = Field(default_factory=TokenUsage)
    turns: int = 1


@runtime_checkable
class ReasoningEngine(Protocol):
    """Anything that turns a Task into raw agent output."""

    async def run(self, task: Task) -> AgentOutput: ...


class ReActEngine:
    """Default engine: LiteLLM chat completions with function calling.

    Each run starts with empty memory, so two engines (or two runs of the
    same engine) never see each other's messages.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        system_prompt: str = "",
        tools: Sequence[Tool] = (),
        memory_window: int = 10,
        max_turns: int = 10,
        name: str = "agent",
    ) -> None:
        """Initialize engine.

        Args:
            llm_client: Client used for every model turn
            system_prompt: System message prepended to each request
            tools: Tools the model may call
            memory_window: Number of recent messages kept after the task
            max_turns: Model turns allowed before giving up
            name: Agent name for logs
        """
        self.llm_client = llm_client
        self.system_prompt = system_prompt
        self.tools = {tool.name: tool for tool in tools}
        self.memory_window = memory_window
        self.max_turns = max_turns
        self.name = name

    def _build_messages(
        self, task_message: Message, memory: SlidingWindowMemory
    ) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.append(task_message.to_litellm())
        messages.extend(m.to_litellm() for m in memory.recall())
        return messages

    def _dispatch(self, call: Any) -> ToolInvocation:
        name = call.function.name
        arguments = call.function.arguments or "{}"
        tool = self.tools.get(name)
        if tool is None:
            logger.warning(f"{self.name}: model requested unknown tool {name!r}")
            result = ToolResult(tool=name, success=False, error=f"unknown tool: {name}")
        else:
            result = tool.execute(arguments)
        return ToolInvocation(call_id=call.id, name=name, arguments=arguments, result=result)

    async def run(self, task: Task) -> AgentOutput:
        """Run the reasoning loop until the model answers without tool calls.

        Args:
            task: Prompt for this agent

        Returns:
            AgentOutput with the final text and every tool invocation

        Raises:
            EngineInvocationError: If a model call fails or max_turns is exhausted
        """
        memory = SlidingWindowMemory(self.memory_window)
        task_message = Message(role="user", content=task.prompt)
        tool_schemas = [tool.to_schema() for tool in self.tools.values()] or None
        usage = TokenUsage()
        invocations: list[ToolInvocation] = []

        for turn in range(1, self.max_turns + 1):
            messages = self._build_messages(task_message, memory)
            try:
                reply, turn_usage = await self.llm_client.complete(messages, tools=tool_schemas)
            except Exception as e:
                raise EngineInvocationError(
                    f"{self.name}: model call failed on turn {turn}: {e}"
                ) from e
            usage = usage + turn_usage

            tool_calls = getattr(reply, "tool_calls", None) or []
            if not tool_calls:
                content = reply.content or ""
                memory.remember(Message(role="assistant", content=content))
                logger.info(
                    f"{self.name}: answered after {turn} turn(s), "
                    f"{len(invocations)} tool call(s)"
                )
                return AgentOutput(
                    response=content,
                    tool_calls=invocations,
                    token_usage=usage,
                    turns=turn,
                )

            memory.remember(
                Message(
                    role="assistant",
                    content=reply.content,
                    tool_calls=[
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.function.name,
                                "arguments": call.function.arguments,
                            },
                        }
                        for call in tool_calls
                    ],
                )
            )
            for call in tool_calls:
                invocation = self._dispatch(call)
                invocations.append(invocation)
                memory.remember(
                    Message(
                        role="tool",
                        tool_call_id=invocation.call_id,
                        name=invocation.name,
                        content=invocation.result.to_content(),
                    )
                )

        raise EngineInvocationError(
            f"{self.name}: no final answer after {self.max_turns} turns"
        )
