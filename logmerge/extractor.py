"""Per-file extraction: load one log file and map identifier -> Record."""

import re
from typing import Iterator

from logmerge.errors import TimestampParseFailure
from logmerge.loader import load_content
from logmerge.parser import IDENTIFIER_LENGTH, LINE_PATTERN, Record, build_record, match_line
from logmerge.stats import ScanStats


def iter_lines(content: str) -> Iterator[str]:
    """Yield lines split on '\\n', dropping one trailing '\\r' from each."""
    if not content:
        return
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


def extract_file(
    path: str,
    pattern: re.Pattern = LINE_PATTERN,
    identifier_length: int = IDENTIFIER_LENGTH,
    stats: ScanStats | None = None,
) -> dict[str, Record]:
    """Scan one file and return its identifier -> Record mapping.

    A later line for the same identifier overwrites the earlier one without
    comparing timestamps. TimestampParseFailure aborts the file immediately.
    """
    records: dict[str, Record] = {}
    content = load_content(path)

    for line_number, line in enumerate(iter_lines(content), 1):
        if stats is not None:
            stats.lines_scanned += 1

        captures = match_line(line, pattern)
        if captures is None:
            continue
        if stats is not None:
            stats.lines_matched += 1

        ts_str, id_str, slug_str = captures
        try:
            record = build_record(ts_str, id_str, slug_str, identifier_length)
        except TimestampParseFailure as e:
            raise TimestampParseFailure(e.timestamp, path, line_number) from e

        if record is None:
            if stats is not None:
                stats.invalid_identifiers += 1
            continue

        records[record.identifier] = record

    if stats is not None:
        stats.files_processed += 1
    return records
