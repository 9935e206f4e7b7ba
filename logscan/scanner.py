"""LogScanner: single pass over a log file, last-write-wins dedup by id and vcpu."""

import logging
from collections import Counter
from dataclasses import dataclass, field

from logscan.config import Config
from logscan.errors import ScanError
from logscan.extractor import classify_line
from logscan.models import LogRecord
from logscan.reader import LineReader

logger = logging.getLogger(__name__)


@dataclass
class ScanStats:
    lines_read: int = 0
    lines_matched: int = 0
    skipped: Counter = field(default_factory=Counter)
    tag_counts: Counter = field(default_factory=Counter)


class LogScanner:
    """Keeps the most recent line per id key and per vcpu key.

    ``primary`` maps id key -> LogRecord, ``vcpus`` maps vcpu key -> LogRecord.
    Both are filled by the same pass and only ever read through the sorted
    report methods.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.primary: dict[str, LogRecord] = {}
        self.vcpus: dict[str, LogRecord] = {}
        self.stats = ScanStats()
        self.error: ScanError | None = None

    def ingest(self, line_number: int, text: str) -> bool:
        """Index one line. Returns False if the line was skipped."""
        self.stats.lines_read += 1
        reason, keys = classify_line(
            text, self.config.prefixes, self.config.min_length, self.config.encoding
        )
        if keys is None:
            self.stats.skipped[reason] += 1
            return False

        record = LogRecord(line_number=line_number, text=text)
        self.primary[keys.id_key] = record
        self.vcpus[keys.cpu_key] = record
        self.stats.lines_matched += 1
        self.stats.tag_counts[keys.tag] += 1
        return True

    def consume(self, path: str | None = None):
        """Read the whole file once. Raises OpenError; a read error is deferred to check()."""
        path = path or self.config.log_path
        with LineReader(path, self.config.max_line_bytes, self.config.encoding) as reader:
            for line_number, text in reader:
                self.ingest(line_number, text)
            self.error = reader.error
        logger.info(
            "Scanned %s: %d lines, %d matched, %d ids, %d vcpus",
            path, self.stats.lines_read, self.stats.lines_matched,
            len(self.primary), len(self.vcpus),
        )

    def check(self):
        """Raise the deferred read error, if any."""
        if self.error is not None:
            raise self.error

    @staticmethod
    def _sorted(index: dict[str, LogRecord]) -> list[LogRecord]:
        return sorted(index.values(), key=lambda record: record.line_number)

    def primary_report(self) -> list[LogRecord]:
        return self._sorted(self.primary)

    def vcpu_report(self) -> list[LogRecord]:
        return self._sorted(self.vcpus)

    def scan(self, path: str | None = None) -> tuple[list[LogRecord], list[LogRecord]]:
        """Consume the file and return (primary_report, vcpu_report).

        Raises OpenError or ScanError, both IOError subclasses.
        """
        self.consume(path)
        primary = self.primary_report()
        self.check()
        return primary, self.vcpu_report()
