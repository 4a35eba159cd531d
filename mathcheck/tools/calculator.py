"""Arithmetic expression tool backed by sympy."""

import math
import re
from collections.abc import Callable

import sympy as sp
from pydantic import BaseModel, Field
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from mathcheck.tools.base import Tool, ToolExecutionError

# digits, names, whitespace, operators, parentheses, decimal point, argument comma
_ALLOWED_CHARS = re.compile(r"[0-9A-Za-z\s+\-*/^().,]+")
_NAME = re.compile(r"[A-Za-z]+")

_TRANSFORMATIONS = standard_transformations + (convert_xor,)

_LOCALS = {
    "pi": sp.pi,
    "e": sp.E,
    "sqrt": sp.sqrt,
    "exp": sp.exp,
    "log": sp.log,
    "ln": sp.log,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "abs": sp.Abs,
}

# sympy namespace without Python builtins, so eval inside parse_expr stays arithmetic
_GLOBALS = {name: obj for name, obj in vars(sp).items() if not name.startswith("_")}
_GLOBALS["__builtins__"] = {}


def _power(base: float, exponent: float) -> float:
    try:
        result = base ** exponent
    except OverflowError:
        return math.inf
    if isinstance(result, complex):
        raise ValueError(f"{base} ** {exponent} is not real")
    return result


_FLOAT_OPS: dict[type, Callable[..., float]] = {
    sp.Add: lambda *terms: math.fsum(terms),
    sp.Mul: lambda *factors: math.prod(factors),
    sp.Pow: _power,
    sp.exp: math.exp,
    sp.log: math.log,
    sp.sin: math.sin,
    sp.cos: math.cos,
    sp.tan: math.tan,
    sp.Abs: abs,
}


def _to_float(node: sp.Basic) -> float:
    """Evaluate an unevaluated sympy tree bottom-up in float arithmetic.

    Overflow surfaces as OverflowError at the node where it happens, so
    towers like 9^9^9^9 fail immediately instead of growing a bignum.
    """
    if not node.args:
        value = float(node)
    else:
        op = _FLOAT_OPS.get(node.func)
        if op is None:
            raise ValueError(f"unsupported operation {node.func.__name__}")
        value = op(*(_to_float(arg) for arg in node.args))

    if not math.isfinite(value):
        raise OverflowError("result has no finite value")
    return value


class CalculatorArgs(BaseModel):
    """Arguments for the calculate tool."""

    expression: str = Field(
        min_length=1,
        description="The mathematical expression to evaluate (e.g., '20 + 5')",
    )


def evaluate_expression(expression: str) -> float:
    """Evaluate an arithmetic expression under standard precedence.

    Supports + - * / ^ (exponent), parentheses, decimal literals and a
    few named constants and functions (pi, e, sqrt, log, ...).

    Args:
        expression: Expression text, e.g. "100 * 1.4 * 0.6"

    Returns:
        Finite real result as float

    Raises:
        ToolExecutionError: If the expression is malformed or has no finite real value
    """
    if not _ALLOWED_CHARS.fullmatch(expression):
        raise ToolExecutionError(
            CalculatorTool.name, f"unsupported characters in expression {expression!r}"
        )

    unknown = [n for n in _NAME.findall(expression) if n not in _LOCALS]
    if unknown:
        raise ToolExecutionError(
            CalculatorTool.name, f"unknown names in expression: {', '.join(unknown)}"
        )

    try:
        # evaluate=False leaves the tree for _to_float, so nothing is computed exactly
        expr = parse_expr(
            expression,
            local_dict=dict(_LOCALS),
            global_dict=_GLOBALS,
            transformations=_TRANSFORMATIONS,
            evaluate=False,
        )
        return _to_float(expr)
    except Exception as e:
        raise ToolExecutionError(
            CalculatorTool.name, f"cannot evaluate {expression!r}: {e}"
        ) from e


class CalculatorTool(Tool):
    """Evaluate arithmetic expressions for the worker agent."""

    name = "calculate"
    description = "Evaluate an arithmetic expression and return the numeric result"
    args_model = CalculatorArgs

    def invoke(self, args: BaseModel) -> float:
        assert isinstance(args, CalculatorArgs)
        return evaluate_expression(args.expression)
