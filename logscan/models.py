"""LogRecord dataclass — one kept line of the scanned log."""

from dataclasses import dataclass, asdict
from typing import Any


@dataclass(frozen=True)
class LogRecord:
    line_number: int  # 1-based, file order
    text: str

    def __str__(self) -> str:
        return f"{{{self.line_number} {self.text}}}"


def record_to_dict(record: LogRecord) -> dict[str, Any]:
    return asdict(record)
