"""Report output — text or JSON (NDJSON) records, primary report then vcpu report."""

import json
from typing import Callable, TextIO

from logscan.models import LogRecord, record_to_dict

VCPU_HEADER = "vpus is:"


def format_text(record: LogRecord) -> str:
    return str(record)


def format_json(record: LogRecord) -> str:
    """One JSON object per line, compatible with jq."""
    return json.dumps(record_to_dict(record))


def get_formatter(output_format: str = "text") -> Callable[[LogRecord], str]:
    if output_format == "json":
        return format_json
    return format_text


def emit_reports(scanner, out: TextIO, formatter: Callable[[LogRecord], str] = format_text):
    """Write both reports for a scanner that has consumed its file.

    A deferred read error is raised after the primary report is written,
    so the header and vcpu report never appear in that case.
    """
    for record in scanner.primary_report():
        print(formatter(record), file=out)

    scanner.check()

    print(VCPU_HEADER, file=out)
    for record in scanner.vcpu_report():
        print(formatter(record), file=out)
