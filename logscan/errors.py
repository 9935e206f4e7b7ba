"""Exceptions raised while scanning a log file."""


class ScanFailure(OSError):
    """Base class for failures while reading the input log."""


class OpenError(ScanFailure):
    """The input log file could not be opened for reading."""


class ScanError(ScanFailure):
    """A read failure that surfaced after the scan loop ended."""
