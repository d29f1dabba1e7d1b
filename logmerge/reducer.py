"""Directory reduction — fold per-file mappings into one record set.

Merge rule per identifier:
  * absent from the running map -> insert the incoming record as-is
  * present and incoming timestamp strictly newer -> update the timestamp
    only; identifier and slug stay as first seen
  * otherwise -> no change

Keeping the first slug while advancing the timestamp is a long-standing
quirk of this report. ``replace_on_newer=True`` swaps in the whole newer
record instead.
"""

import logging
import os
import re
from dataclasses import replace

from logmerge.errors import DirectoryListFailure
from logmerge.extractor import extract_file
from logmerge.parser import IDENTIFIER_LENGTH, LINE_PATTERN, Record
from logmerge.stats import ScanStats

logger = logging.getLogger(__name__)


def merge_records(
    final: dict[str, Record],
    file_records: dict[str, Record],
    replace_on_newer: bool = False,
) -> dict[str, Record]:
    """Fold one file's records into ``final`` in place and return it."""
    for key, incoming in file_records.items():
        existing = final.get(key)
        if existing is None:
            final[key] = incoming
            continue

        if incoming.timestamp > existing.timestamp:
            if replace_on_newer:
                final[key] = incoming
            else:
                final[key] = replace(existing, timestamp=incoming.timestamp)

    return final


def list_entries(dir_path: str) -> list[str]:
    """Return full paths of directory entries in listing order (unsorted)."""
    try:
        names = os.listdir(dir_path)
    except OSError as e:
        raise DirectoryListFailure(dir_path, str(e)) from e
    return [os.path.join(dir_path, name) for name in names]


def reduce_directory(
    dir_path: str,
    pattern: re.Pattern = LINE_PATTERN,
    identifier_length: int = IDENTIFIER_LENGTH,
    replace_on_newer: bool = False,
    stats: ScanStats | None = None,
) -> dict[str, Record]:
    """Extract every file in ``dir_path`` and merge the results.

    Any ExtractionError propagates and the partial result is discarded.
    """
    final: dict[str, Record] = {}

    for path in list_entries(dir_path):
        logger.info("Parsing %s...", path)
        file_records = extract_file(
            path,
            pattern=pattern,
            identifier_length=identifier_length,
            stats=stats,
        )
        merge_records(final, file_records, replace_on_newer=replace_on_newer)

    if stats is not None:
        stats.unique_identifiers = len(final)
    logger.info("Done: %d unique identifier(s) from %s", len(final), dir_path)
    return final
