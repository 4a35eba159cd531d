"""Tool capability interface exposed to reasoning engines."""

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from loguru import logger
from pydantic import BaseModel, ValidationError


class ToolExecutionError(Exception):
    """A tool rejected its input or failed to produce a result."""

    def __init__(self, tool_name: str, message: str) -> None:
        """Initialize tool execution error.

        Args:
            tool_name: Name of the failing tool
            message: Human-readable diagnostic
        """
        super().__init__(f"{tool_name}: {message}")
        self.tool_name = tool_name
        self.message = message


class ToolResult(BaseModel):
    """Outcome of one tool invocation: a number or a typed failure."""

    tool: str
    success: bool
    value: float | None = None
    error: str | None = None

    def to_content(self) -> str:
        """Render the result as the content of a tool message.

        Returns:
            JSON text the model reads back
        """
        if self.success:
            return json.dumps(self.value)
        return json.dumps({"error": self.error})


class Tool(ABC):
    """A deterministic function with a declared input schema."""

    name: ClassVar[str]
    description: ClassVar[str]
    args_model: ClassVar[type[BaseModel]]

    @abstractmethod
    def invoke(self, args: BaseModel) -> float:
        """Run the tool on validated arguments.

        Raises:
            ToolExecutionError: If the tool cannot produce a result
        """

    def execute(self, raw_args: str | dict[str, Any]) -> ToolResult:
        """Validate arguments and invoke the tool, never raising.

        Args:
            raw_args: JSON text or dict as produced by the engine

        Returns:
            ToolResult carrying either the value or the failure
        """
        try:
            if isinstance(raw_args, str):
                args = self.args_model.model_validate_json(raw_args)
            else:
                args = self.args_model.model_validate(raw_args)
        except ValidationError as e:
            logger.warning(f"Tool {self.name} got invalid arguments: {raw_args!r}")
            return ToolResult(
                tool=self.name,
                success=False,
                error=f"invalid arguments: {e.errors(include_url=False)}",
            )

        try:
            value = self.invoke(args)
        except ToolExecutionError as e:
            logger.warning(f"Tool {self.name} failed: {e.message}")
            return ToolResult(tool=self.name, success=False, error=e.message)

        logger.debug(f"Tool {self.name}({args.model_dump_json()}) -> {value}")
        return ToolResult(tool=self.name, success=True, value=value)

    def to_schema(self) -> dict[str, Any]:
        """Declare the tool in OpenAI function-calling shape.

        Returns:
            Tool declaration dict for acompletion(tools=...)
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.args_model.model_json_schema(),
            },
        }
