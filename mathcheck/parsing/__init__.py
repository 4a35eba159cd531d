"""Parsing of loosely structured agent output."""

from mathcheck.parsing.coercion import coerce_worker_output
from mathcheck.parsing.json_extract import (
    extract_and_format_json,
    extract_json_candidate,
    parse_verdict,
)

__all__ = [
    "coerce_worker_output",
    "extract_and_format_json",
    "extract_json_candidate",
    "parse_verdict",
]
