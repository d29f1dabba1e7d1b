"""Access log line matcher and record builder — frozen dataclass + compiled regex."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from logmerge.errors import TimestampParseFailure

logger = logging.getLogger(__name__)

DEFAULT_ROUTE_PREFIX = "/observabilityapp/d/"
IDENTIFIER_LENGTH = 9

# Apache common log time, e.g. 10/Oct/2000:13:55:36 -0700
TIMESTAMP_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


def compile_line_pattern(route_prefix: str = DEFAULT_ROUTE_PREFIX) -> re.Pattern:
    """Build the request-line regex for a route prefix.

    Captures (timestamp, identifier, slug) from lines like
    ``[10/Oct/2000:13:55:36 -0700] "GET /observabilityapp/d/<id>/<slug> HTTP/1.1"``.
    The slug runs to the first space or '?', so a request with no HTTP
    version keeps its closing quote (``/d/<id>/foo"`` gives slug ``foo"``).
    """
    return re.compile(
        r"\[([^\]]+)\] "
        r".GET " + re.escape(route_prefix) +
        r"([^/]+)/"
        r"([^ ?]+)"
    )


LINE_PATTERN = compile_line_pattern()


@dataclass(frozen=True)
class Record:
    timestamp: int
    identifier: str
    slug: str


def match_line(line: str, pattern: re.Pattern = LINE_PATTERN) -> tuple[str, str, str] | None:
    """Return the raw (timestamp, identifier, slug) captures, or None if the line doesn't match."""
    m = pattern.search(line)
    if not m:
        return None
    return m.group(1), m.group(2), m.group(3)


def parse_timestamp(ts_str: str) -> int:
    """Convert an Apache timestamp to epoch seconds. Raises TimestampParseFailure."""
    try:
        dt = datetime.strptime(ts_str, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimestampParseFailure(ts_str) from e
    return int(dt.timestamp())


def build_record(
    ts_str: str,
    id_str: str,
    slug_str: str,
    identifier_length: int = IDENTIFIER_LENGTH,
) -> Record | None:
    """Validate captures and build a Record.

    A wrong-length identifier is skipped (returns None). A bad timestamp is
    fatal and raises TimestampParseFailure. The identifier is checked first.
    """
    if len(id_str) != identifier_length:
        logger.warning("Invalid record: %s", id_str)
        return None

    return Record(
        timestamp=parse_timestamp(ts_str),
        identifier=id_str,
        slug=slug_str,
    )
