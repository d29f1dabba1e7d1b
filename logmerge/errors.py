"""Fatal extraction errors. Any of these aborts the whole run."""


class ExtractionError(Exception):
    """Base class for errors that stop a directory scan."""


class IOFailure(ExtractionError):
    """Raised when a log file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not read file {path}: {reason}")


class DirectoryListFailure(ExtractionError):
    """Raised when the input directory cannot be enumerated."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to open directory {path}: {reason}")


class DecodeFailure(ExtractionError):
    """Raised when a non-gzip file is not valid UTF-8 text."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not decode {path} as UTF-8: {reason}")


class TimestampParseFailure(ExtractionError):
    """Raised when a matching line carries a malformed timestamp.

    ``path`` and ``line_number`` are filled in by the file extractor once
    the failing line is known.
    """

    def __init__(self, timestamp: str, path: str | None = None, line_number: int | None = None):
        self.timestamp = timestamp
        self.path = path
        self.line_number = line_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        msg = f"Could not parse timestamp {self.timestamp!r}"
        if self.path is not None:
            msg += f" in {self.path}"
            if self.line_number is not None:
                msg += f" (line {self.line_number})"
        return msg
