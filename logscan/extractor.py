"""Severity-tag matching and dedup key extraction for quark log lines.

A tagged line looks like ``[INFO] [<vcpu>/<id>|<rest>] message``. After the
tag prefix is stripped, the id key runs from the first ``/`` up to (not
including) the first ``|`` and the vcpu key is everything before that ``/``.
"""

from dataclasses import dataclass

# Order matters: prefixes are tested first to last.
TAG_PREFIXES = ("[ERROR] [", "[INFO] [", "[Print] [", "[DEBUG] [")

MIN_LENGTH = 12


@dataclass(frozen=True)
class LineKeys:
    tag: str
    id_key: str
    cpu_key: str


def match_prefix(line: str, prefixes: tuple[str, ...] = TAG_PREFIXES) -> str | None:
    """Return the first prefix the line starts with, or None."""
    for prefix in prefixes:
        if line.startswith(prefix):
            return prefix
    return None


def _tag_name(prefix: str) -> str:
    return prefix.split("]", 1)[0].lstrip("[")


def classify_line(
    line: str,
    prefixes: tuple[str, ...] = TAG_PREFIXES,
    min_length: int = MIN_LENGTH,
    encoding: str = "utf-8",
) -> tuple[str | None, LineKeys | None]:
    """Return (skip_reason, None) for a rejected line or (None, keys) for an accepted one.

    The length limit is measured in encoded bytes, not characters.
    """
    prefix = match_prefix(line, prefixes)
    if prefix is None:
        return "untagged", None

    substr = line[len(prefix):]
    first = substr.find("]")
    left = substr.find("/")
    right = substr.find("|")

    if len(substr.encode(encoding, "surrogateescape")) <= min_length:
        return "too_short", None
    if first == -1 or left == -1 or right == -1:
        return "missing_delimiter", None
    if left > right:
        return "inverted_delimiters", None

    id_key = substr[left:right]
    # Always holds since id_key starts at the slash.
    if "/" not in id_key:
        return "no_slash_in_id", None

    return None, LineKeys(tag=_tag_name(prefix), id_key=id_key, cpu_key=substr[:left])


def extract_keys(
    line: str,
    prefixes: tuple[str, ...] = TAG_PREFIXES,
    min_length: int = MIN_LENGTH,
    encoding: str = "utf-8",
) -> LineKeys | None:
    """Derive the id and vcpu keys of a tagged line. Returns None for skipped lines."""
    _, keys = classify_line(line, prefixes, min_length, encoding)
    return keys


def skip_reason(
    line: str,
    prefixes: tuple[str, ...] = TAG_PREFIXES,
    min_length: int = MIN_LENGTH,
    encoding: str = "utf-8",
) -> str | None:
    """Why a line would be skipped, or None if it yields keys."""
    reason, _ = classify_line(line, prefixes, min_length, encoding)
    return reason
