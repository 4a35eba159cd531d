"""Tools exposed to agents."""

from mathcheck.tools.base import Tool, ToolExecutionError, ToolResult
from mathcheck.tools.calculator import CalculatorArgs, CalculatorTool, evaluate_expression

__all__ = [
    "Tool",
    "ToolResult",
    "ToolExecutionError",
    "CalculatorArgs",
    "CalculatorTool",
    "evaluate_expression",
]
