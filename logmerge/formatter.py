"""Output formatters — text and JSON (NDJSON)."""

import json
from typing import Callable

from logmerge.parser import Record


def format_text(record: Record) -> str:
    """Return the human-readable report line."""
    return f"UID: {record.identifier} (slug: {record.slug}) TS: {record.timestamp}"


def format_json(record: Record) -> str:
    """Return NDJSON — one JSON object per line, compatible with jq."""
    return json.dumps({
        "identifier": record.identifier,
        "slug": record.slug,
        "timestamp": record.timestamp,
    })


def get_formatter(output_format: str = "text") -> Callable[[Record], str]:
    """Factory that returns the right formatter for the output format."""
    if output_format == "json":
        return format_json
    return format_text
