"""LineReader: numbered line iteration with a deferred read error."""

import logging
from typing import BinaryIO, Generator

from logscan.errors import OpenError, ScanError

logger = logging.getLogger(__name__)

MAX_LINE_BYTES = 64 * 1024


class LineReader:
    """Yield ``(line_number, text)`` pairs from a file, numbered from 1.

    Read failures and over-long lines end the iteration instead of raising;
    the failure is kept in ``self.error`` for the caller to check once the
    loop is done. Undecodable bytes are kept as surrogate escapes so the text
    encodes back to the original bytes.
    """

    def __init__(self, path: str, max_line_bytes: int = MAX_LINE_BYTES, encoding: str = "utf-8"):
        self.path = path
        self.max_line_bytes = max_line_bytes
        self.encoding = encoding
        self.error: ScanError | None = None
        self.lines_read = 0
        self._fh: BinaryIO | None = None

    def open(self) -> "LineReader":
        try:
            self._fh = open(self.path, "rb")
        except OSError as exc:
            raise OpenError(exc.errno, f"cannot open {self.path}: {exc.strerror}") from exc
        logger.debug("Opened %s", self.path)
        return self

    def close(self):
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "LineReader":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _read_raw(self) -> bytes | None:
        try:
            raw = self._fh.readline(self.max_line_bytes)
        except OSError as exc:
            self.error = ScanError(exc.errno, f"read error in {self.path}: {exc.strerror}")
            return None
        # The terminator counts against the limit, so a full read without one is too long.
        if len(raw) >= self.max_line_bytes and not raw.endswith(b"\n"):
            self.error = ScanError(
                f"line {self.lines_read + 1} of {self.path} exceeds {self.max_line_bytes} bytes"
            )
            return None
        return raw or None

    def __iter__(self) -> Generator[tuple[int, str], None, None]:
        if self._fh is None:
            self.open()
        while self.error is None:
            raw = self._read_raw()
            if raw is None:
                break
            if raw.endswith(b"\n"):
                raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            self.lines_read += 1
            yield self.lines_read, raw.decode(self.encoding, errors="surrogateescape")
        if self.error is not None:
            logger.debug("Scan stopped after %d lines: %s", self.lines_read, self.error)
