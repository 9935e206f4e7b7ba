"""Configuration loading from CLI args, env vars, and optional YAML file."""

import codecs
import os
import logging
from dataclasses import dataclass

import yaml

from logscan.extractor import MIN_LENGTH, TAG_PREFIXES
from logscan.reader import MAX_LINE_BYTES

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = "/var/log/quark/quark.log"
OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class Config:
    log_path: str = DEFAULT_LOG_PATH
    max_line_bytes: int = MAX_LINE_BYTES
    min_length: int = MIN_LENGTH
    prefixes: tuple[str, ...] = TAG_PREFIXES
    output_format: str = "text"
    encoding: str = "utf-8"


def load_yaml_config(path: str | None) -> dict:
    """Load scanner settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(cli_args=None, yaml_data: dict | None = None) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data.

    Precedence: CLI > environment > YAML > defaults.
    """
    yaml_data = yaml_data or {}

    log_path = getattr(cli_args, "path", None) or os.environ.get(
        "QUARK_LOG_PATH", yaml_data.get("log_path", Config.log_path)
    )
    output_format = getattr(cli_args, "output", None) or os.environ.get(
        "QUARK_OUTPUT_FORMAT", yaml_data.get("output_format", Config.output_format)
    )
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {output_format!r}")

    max_line_bytes = int(
        os.environ.get("QUARK_MAX_LINE_BYTES", yaml_data.get("max_line_bytes", Config.max_line_bytes))
    )
    if max_line_bytes <= 0:
        raise ValueError("max_line_bytes must be positive")

    prefixes = yaml_data.get("prefixes", Config.prefixes)
    if not isinstance(prefixes, (list, tuple)) or not all(isinstance(p, str) and p for p in prefixes):
        raise ValueError("prefixes must be a list of non-empty strings")

    encoding = yaml_data.get("encoding", Config.encoding)
    try:
        codecs.lookup(encoding)
    except (LookupError, TypeError) as exc:
        raise ValueError(f"Unknown encoding: {encoding!r}") from exc

    return Config(
        log_path=log_path,
        max_line_bytes=max_line_bytes,
        min_length=int(yaml_data.get("min_length", Config.min_length)),
        prefixes=tuple(prefixes),
        output_format=output_format,
        encoding=encoding,
    )
