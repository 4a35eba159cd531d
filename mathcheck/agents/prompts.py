"""Prompt templates for the worker and verifier agents."""

import json
import math

from mathcheck.models.answer import WorkerAnswer

VERDICT_SCHEMA = """{
  "is_correct": boolean,
  "issues": [string, ...],
  "final_answer": string
}"""

VERIFICATION_TEMPLATE = """You are a strict verifier.

User question:
{question}

Solver answer:
{answer}

Tasks:
1) Decide if the solver answer is correct.
2) If incorrect or incomplete, correct it.
3) Return ONLY valid JSON:
{schema}
"""

WORKER_OUTPUT_INSTRUCTIONS = """When you have the final result, respond with ONLY a JSON object
matching this schema and nothing else:
{schema}
Example: {{"value": 42.5}}"""


def format_number(value: float) -> str:
    """Render a float without a trailing ".0" for integral values.

    Args:
        value: Number to render

    Returns:
        "4" for 4.0, "0.1" for 0.1, "inf"/"nan" unchanged
    """
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def build_verification_prompt(question: str, worker_value: float) -> str:
    """Render the verifier's task from the question and the worker's answer.

    Args:
        question: Original user question, interpolated as-is
        worker_value: Worker's numeric answer

    Returns:
        Verification prompt text
    """
    return VERIFICATION_TEMPLATE.format(
        question=question,
        answer=format_number(worker_value),
        schema=VERDICT_SCHEMA,
    )


def build_worker_system_prompt(base_prompt: str) -> str:
    """Append the WorkerAnswer output contract to the worker's system prompt.

    Args:
        base_prompt: Configured system prompt, may be empty

    Returns:
        System prompt including the JSON output schema
    """
    schema = json.dumps(WorkerAnswer.model_json_schema(), sort_keys=True)
    instructions = WORKER_OUTPUT_INSTRUCTIONS.format(schema=schema)
    if base_prompt:
        return f"{base_prompt}\n\n{instructions}"
    return instructions
