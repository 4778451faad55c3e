"""benchsweep.sweep.samples

SampleSet: a MetricSample over raw recorded values.

For executors that keep raw latencies instead of a histogram. Quantile lookups
return a recorded value (inverted CDF), the way histogram lookups do.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np


class SampleSet:
    def __init__(self, values: Iterable[float] | np.ndarray = ()) -> None:
        raw = values if isinstance(values, np.ndarray) else list(values)
        self._values = np.sort(np.asarray(raw, dtype=np.float64))

    @property
    def values(self) -> np.ndarray:
        return self._values

    def count(self) -> int:
        return int(self._values.size)

    def min(self) -> float:
        if self._values.size == 0:
            return 0.0
        return float(self._values[0])

    def max(self) -> float:
        if self._values.size == 0:
            return 0.0
        return float(self._values[-1])

    def mean(self) -> float:
        if self._values.size == 0:
            return 0.0
        return float(np.mean(self._values))

    def value_at_quantile(self, quantile: float) -> float:
        q = float(quantile)
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"quantile must be within [0, 1], got {quantile}")
        if self._values.size == 0:
            return 0.0
        return float(np.quantile(self._values, q, method="inverted_cdf"))

    def __repr__(self) -> str:
        return f"SampleSet(count={self.count()}, min={self.min()}, max={self.max()})"
