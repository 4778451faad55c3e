"""benchsweep: one axis, many runs.

A sweep varies exactly one benchmark parameter across a list of values, runs the
external executor once per value, and appends one summary row per run.

Everything else about the benchmark stays fixed. That is the point.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "PROGRAM_NAME",
]

__version__ = "0.3.0"

# Synthetic argv[0] for re-parsing a single overridden flag.
PROGRAM_NAME = "benchmarks"
