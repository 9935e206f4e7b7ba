"""Scan statistics summary — text and JSON."""

import json

from logscan.scanner import ScanStats


def format_stats_text(stats: ScanStats) -> str:
    """Human-readable stats summary."""
    lines = []
    lines.append(f"Lines read: {stats.lines_read}")
    lines.append(f"Lines matched: {stats.lines_matched}")
    lines.append("")

    lines.append("Tag counts:")
    for tag, count in stats.tag_counts.most_common():
        lines.append(f"  {tag:8s} {count}")
    lines.append("")

    if stats.skipped:
        lines.append("Skipped lines:")
        for reason, count in stats.skipped.most_common():
            lines.append(f"  {reason:20s} {count}")
    else:
        lines.append("No skipped lines.")

    return "\n".join(lines)


def format_stats_json(stats: ScanStats) -> str:
    return json.dumps({
        "lines_read": stats.lines_read,
        "lines_matched": stats.lines_matched,
        "tag_counts": dict(stats.tag_counts.most_common()),
        "skipped": dict(stats.skipped.most_common()),
    }, indent=2)
