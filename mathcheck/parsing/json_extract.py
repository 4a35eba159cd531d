"""Tolerant extraction of JSON payloads from free-form model output."""

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from mathcheck.models.answer import Verdict

JSON_FENCE_OPEN = "```json"
FENCE_CLOSE = "```"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def extract_json_candidate(text: str) -> str:
    """Locate the JSON candidate inside text.

    The candidate is the body of the first ```json fence, or the whole text
    when no fence is present. An unterminated fence yields the rest of the
    text from the marker onward, marker included. The result is stripped.

    Args:
        text: Model output

    Returns:
        Candidate substring to parse
    """
    start = text.find(JSON_FENCE_OPEN)
    if start == -1:
        return text.strip()

    body_start = start + len(JSON_FENCE_OPEN)
    end = text.find(FENCE_CLOSE, body_start)
    if end == -1:
        return text[start:].strip()
    return text[body_start:end].strip()


def extract_and_format_json(text: str) -> str:
    """Pretty-print the JSON embedded in text, or return text unchanged.

    Args:
        text: Model output that may contain JSON, fenced or bare

    Returns:
        Canonical indented JSON on success, otherwise the original text verbatim
    """
    candidate = extract_json_candidate(text)
    try:
        value = json.loads(candidate, parse_constant=_reject_constant)
        # out-of-range numbers parse to inf, which has no JSON form
        return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False)
    except (ValueError, RecursionError) as e:
        logger.debug(f"No parseable JSON in model output: {type(e).__name__}: {e}")
        return text


def parse_verdict(verdict_text: str) -> Verdict | None:
    """Read a typed Verdict out of extracted verdict text.

    Args:
        verdict_text: Output of extract_and_format_json

    Returns:
        Verdict if the text is a verdict-shaped JSON object, else None
    """
    try:
        return Verdict.model_validate_json(verdict_text)
    except ValidationError:
        return None
