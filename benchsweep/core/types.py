"""benchsweep.core.types

Lightweight dataclasses and protocols shared by the sweep pipeline.

Pydantic models own IO boundaries (config); dataclasses keep the run loop lean.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class SweepPoint:
    axis_name: str
    axis_value: str
    axis_is_datagen_variable: bool = False


@runtime_checkable
class MetricSample(Protocol):
    """Histogram-queryable measurement for one metric of one run.

    Owned by the executor. The sweep reads it once, right after the run.
    """

    def count(self) -> int: ...

    def min(self) -> float: ...

    def max(self) -> float: ...

    def mean(self) -> float: ...

    def value_at_quantile(self, quantile: float) -> float: ...


@dataclass(frozen=True, slots=True)
class BenchmarkResults:
    """What an executor hands back after a completed run."""

    results: Mapping[str, MetricSample] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class QuantileSpec:
    """Ordered (label, fraction) pairs.

    Fixes which quantiles are reported and their left-to-right column order.
    Built once at startup and passed to the results writer.
    """

    entries: tuple[tuple[str, float], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        normalized: list[tuple[str, float]] = []
        for label, fraction in self.entries:
            label = str(label)
            fraction = float(fraction)
            if not label:
                raise ValueError("quantile label must be non-empty")
            if label in seen:
                raise ValueError(f"duplicate quantile label: {label}")
            if math.isnan(fraction) or not 0.0 <= fraction <= 1.0:
                raise ValueError(f"quantile {label} must be within [0, 1], got {fraction}")
            seen.add(label)
            normalized.append((label, fraction))
        object.__setattr__(self, "entries", tuple(normalized))

    @classmethod
    def of(cls, pairs: Iterable[tuple[str, float]]) -> QuantileSpec:
        return cls(entries=tuple(pairs))

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self.entries)

    @property
    def fractions(self) -> tuple[float, ...]:
        return tuple(fraction for _, fraction in self.entries)

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


DEFAULT_QUANTILES = QuantileSpec.of(
    [
        ("p50", 0.5),
        ("p90", 0.9),
        ("p99", 0.99),
        ("p99.99", 0.9999),
    ]
)
