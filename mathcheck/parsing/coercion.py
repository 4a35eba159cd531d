"""Best-effort coercion of worker output into a WorkerAnswer."""

from loguru import logger
from pydantic import ValidationError

from mathcheck.models.answer import CoercionResult, Defaulted, Parsed, WorkerAnswer


def coerce_worker_output(raw: str) -> CoercionResult:
    """Parse worker text as a WorkerAnswer JSON object, defaulting on failure.

    Parsing is strict: the text must be a JSON object whose ``value`` is a
    number (ints are accepted, strings and booleans are not). Any failure
    yields the default answer of 0; nothing is raised.

    Args:
        raw: Raw text produced by the worker agent

    Returns:
        Parsed(answer) on success, Defaulted(raw_text, reason) otherwise
    """
    try:
        answer = WorkerAnswer.model_validate_json(raw, strict=True)
    except ValidationError as e:
        reason = "; ".join(err["msg"] for err in e.errors(include_url=False))
        logger.debug(f"Worker output not coercible ({reason}), using default answer")
        return Defaulted(raw_text=raw, reason=reason)

    return Parsed(answer=answer)
