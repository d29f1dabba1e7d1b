"""Scan statistics filled in while extracting a directory."""

import json
from dataclasses import asdict, dataclass


@dataclass
class ScanStats:
    files_processed: int = 0
    lines_scanned: int = 0
    lines_matched: int = 0
    invalid_identifiers: int = 0
    unique_identifiers: int = 0


def format_stats_text(stats: ScanStats) -> str:
    """Human-readable stats summary."""
    lines = [
        f"Files processed:     {stats.files_processed}",
        f"Lines scanned:       {stats.lines_scanned}",
        f"Lines matched:       {stats.lines_matched}",
        f"Invalid identifiers: {stats.invalid_identifiers}",
        f"Unique identifiers:  {stats.unique_identifiers}",
    ]
    return "\n".join(lines)


def format_stats_json(stats: ScanStats) -> str:
    """Single-line JSON stats, so it can trail NDJSON record output."""
    return json.dumps({"stats": asdict(stats)})
