"""benchsweep.sweep.generator

Sweep points, one per axis value, in the order given.
"""

from __future__ import annotations

from collections.abc import Iterator

from benchsweep.core.config import SweepConfig
from benchsweep.core.exceptions import SweepStateError
from benchsweep.core.types import SweepPoint


def _points(axis_name: str, axis_values: tuple[str, ...], datagen: bool) -> Iterator[SweepPoint]:
    for value in axis_values:
        yield SweepPoint(axis_name=axis_name, axis_value=value, axis_is_datagen_variable=datagen)


def generate(config: SweepConfig) -> Iterator[SweepPoint]:
    """Lazily yield one SweepPoint per value of `config.axis_values`.

    Raises SweepStateError on the call itself (not on first iteration) if the
    sweep is disabled. Calling a generator for a disabled sweep is a bug in the
    caller, not a condition to recover from.
    """

    if not config.enabled or config.axis_name is None or config.axis_values is None:
        raise SweepStateError("sweep points requested but the sweep is not enabled")
    return _points(config.axis_name, config.axis_values, config.axis_is_datagen_variable)
