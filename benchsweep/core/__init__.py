"""benchsweep.core

Core primitives: config, errors, shared types, logging.

If a module needs to exist, it should probably depend only on this package.
"""

from .config import Config, LoggingConfig, SweepConfig
from .exceptions import BenchsweepError
from .types import DEFAULT_QUANTILES, BenchmarkResults, MetricSample, QuantileSpec, SweepPoint

__all__ = [
    "BenchmarkResults",
    "BenchsweepError",
    "Config",
    "DEFAULT_QUANTILES",
    "LoggingConfig",
    "MetricSample",
    "QuantileSpec",
    "SweepConfig",
    "SweepPoint",
]
