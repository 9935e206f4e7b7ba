"""quark-log-scan — latest log line per task id and per vcpu from a quark log."""

import logging
import sys
from argparse import ArgumentParser

from logscan.config import OUTPUT_FORMATS, load_config, load_yaml_config
from logscan.errors import OpenError, ScanError
from logscan.formatter import emit_reports, get_formatter
from logscan.scanner import LogScanner
from logscan.stats import format_stats_json, format_stats_text

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="quark-log-scan",
        description="Print the most recent log line per task id and per vcpu.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Log file to scan (default: /var/log/quark/quark.log)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print scan statistics to stderr after the reports",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def run(args) -> int:
    try:
        config = load_config(args, load_yaml_config(args.config))
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    # Undecodable input bytes come back out unchanged.
    sys.stdout.reconfigure(encoding=config.encoding, errors="surrogateescape")
    scanner = LogScanner(config)

    try:
        scanner.consume(config.log_path)
        emit_reports(scanner, sys.stdout, get_formatter(config.output_format))
    except (OpenError, ScanError) as exc:
        sys.stdout.flush()
        logger.error("%s", exc)
        return 1

    if args.stats:
        if config.output_format == "json":
            print(format_stats_json(scanner.stats), file=sys.stderr)
        else:
            print(format_stats_text(scanner.stats), file=sys.stderr)
    return 0


def main():
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [quark-scan] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
