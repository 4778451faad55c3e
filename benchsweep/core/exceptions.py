"""benchsweep.core.exceptions

Errors are part of the interface.

Every failure a caller can see is one of these, except executor failures,
which pass through untouched.
"""

from __future__ import annotations

from pathlib import Path


class BenchsweepError(Exception):
    """Base exception for benchsweep."""


class ConfigError(BenchsweepError):
    """Configuration is missing, invalid, or inconsistent."""


class SweepConfigError(ConfigError):
    """Sweep flags were only partially supplied."""


class SweepStateError(BenchsweepError):
    """A sweep operation was invoked on a disabled sweep configuration."""


class OutputFormatError(BenchsweepError):
    """The results path does not map to a usable output format."""


class UnsupportedFormatError(OutputFormatError):
    """The results path has an extension no writer handles."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported extension for results path: .{extension}")


class UndetectableFormatError(OutputFormatError):
    """The results path has no extension to dispatch on."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Could not determine output file format from results path: {path}")


class FormatNotImplementedError(OutputFormatError):
    """Reserved format. Not a fallback: do not retry with another one."""


class ResultsWriteError(BenchsweepError):
    """Opening or appending to the results file failed."""

    def __init__(self, message: str, *, path: Path, axis_value: str | None = None) -> None:
        self.path = path
        self.axis_value = axis_value
        super().__init__(message)


class ExecutorLoadError(BenchsweepError):
    """The executor reference could not be imported or does not expose run()."""
