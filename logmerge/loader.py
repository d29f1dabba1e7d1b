"""Read a log file, transparently decompressing gzip content."""

import logging
import zlib

from logmerge.errors import DecodeFailure, IOFailure

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def _gunzip_text(data: bytes) -> str:
    """Decompress gzip members and decode as UTF-8.

    Members are read back to back; anything after the last member that
    isn't another gzip header is ignored.
    """
    chunks = []
    while data:
        d = zlib.decompressobj(wbits=31)
        chunks.append(d.decompress(data))
        if not d.eof:
            raise EOFError("truncated gzip stream")
        data = d.unused_data
        if not data.startswith(GZIP_MAGIC):
            break
    return b"".join(chunks).decode("utf-8")


def load_content(path: str) -> str:
    """Return the text content of ``path``.

    Gzip data is decompressed. Anything that fails to decompress is treated
    as plain UTF-8 text instead. Raises IOFailure if the file can't be read
    and DecodeFailure if the plain-text fallback is not valid UTF-8.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise IOFailure(path, str(e)) from e

    try:
        return _gunzip_text(data)
    except (EOFError, zlib.error, UnicodeDecodeError) as e:
        logger.debug("%s is not gzip text (%s), reading as plain text", path, e)

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeFailure(path, str(e)) from e
