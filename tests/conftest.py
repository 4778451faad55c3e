from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from benchsweep.core.config import SweepConfig  # noqa: E402
from benchsweep.core.types import BenchmarkResults, QuantileSpec  # noqa: E402
from benchsweep.sweep.overrides import CliTokens, OverrideInstruction, StructuredPatch  # noqa: E402
from benchsweep.sweep.samples import SampleSet  # noqa: E402


@dataclass(frozen=True)
class FixedSample:
    """MetricSample with canned answers."""

    n: int
    lo: float
    hi: float
    avg: float
    quantiles: dict[float, float] = field(default_factory=dict)

    def count(self) -> int:
        return self.n

    def min(self) -> float:
        return self.lo

    def max(self) -> float:
        return self.hi

    def mean(self) -> float:
        return self.avg

    def value_at_quantile(self, quantile: float) -> float:
        return self.quantiles[quantile]


class RecordingExecutor:
    """Returns a SampleSet per metric derived from the override's value."""

    def __init__(self, *, fail_on: str | None = None) -> None:
        self.instructions: list[OverrideInstruction] = []
        self.fail_on = fail_on

    def run(self, instruction: OverrideInstruction) -> BenchmarkResults:
        self.instructions.append(instruction)
        if isinstance(instruction, CliTokens):
            value = instruction.tokens[-1]
        else:
            assert isinstance(instruction, StructuredPatch)
            value = instruction.value
        if value == self.fail_on:
            raise RuntimeError(f"executor blew up at {value}")
        base = float(value)
        return BenchmarkResults(
            results={
                "write": SampleSet([base, base * 2, base * 3]),
                "read": SampleSet([base + i for i in range(100)]),
            }
        )


@pytest.fixture()
def quantiles() -> QuantileSpec:
    return QuantileSpec.of([("p50", 0.5), ("p99", 0.99)])


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def sweep_config(tmp_path: Path) -> SweepConfig:
    return SweepConfig(
        enabled=True,
        axis_name="target-qps",
        axis_values=("100", "200", "300"),
        output_path=tmp_path / "out.csv",
    )
