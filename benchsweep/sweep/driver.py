"""benchsweep.sweep.driver

The sweep loop. Strictly sequential, one point at a time:
- encode the point
- executor runs with the override
- results go straight to the writer (flushed) before the next point starts

No retries, no skipping. The first failure ends the sweep; rows already written stay.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from benchsweep.core.config import SweepConfig
from benchsweep.core.exceptions import SweepStateError
from benchsweep.core.types import QuantileSpec
from benchsweep.sweep.executors import BenchmarkExecutor
from benchsweep.sweep.generator import generate
from benchsweep.sweep.overrides import OverrideInstruction, encode
from benchsweep.sweep.writer import open_results_writer

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SweepSummary:
    output_path: Path
    axis_name: str
    points_completed: int


def plan_sweep(sweep: SweepConfig) -> list[OverrideInstruction]:
    """Encode every point without running anything."""

    return [encode(p) for p in generate(sweep)]


def run_sweep(
    sweep: SweepConfig,
    executor: BenchmarkExecutor,
    *,
    quantiles: QuantileSpec,
    header: bool = False,
    logger: logging.Logger | None = None,
) -> SweepSummary:
    logger = logger or log

    if not sweep.enabled or sweep.output_path is None or sweep.axis_name is None:
        raise SweepStateError("run_sweep called with a disabled sweep configuration")

    # Open first: a bad output path must fail before the executor is touched.
    writer = open_results_writer(sweep.output_path, quantiles, axis_name=sweep.axis_name, header=header)
    completed = 0
    total = len(sweep.axis_values or ())

    logger.info(
        "sweep_started",
        extra={"axis": sweep.axis_name, "points": total, "path": str(sweep.output_path)},
    )

    with writer:
        for point in generate(sweep):
            instruction = encode(point)
            start = time.perf_counter()
            logger.info("sweep_point_started", extra={"axis": point.axis_name, "x_value": point.axis_value})
            try:
                results = executor.run(instruction)
                writer.write_row(point.axis_value, results.results)
            except Exception as e:
                e.add_note(f"sweep aborted at {point.axis_name}={point.axis_value!r} ({completed}/{total} points written)")
                logger.error(
                    "sweep_point_failed",
                    extra={
                        "axis": point.axis_name,
                        "x_value": point.axis_value,
                        "completed": completed,
                        "error": f"{type(e).__name__}: {e}",
                    },
                )
                raise
            completed += 1
            logger.info(
                "sweep_point_done",
                extra={
                    "axis": point.axis_name,
                    "x_value": point.axis_value,
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )

    logger.info("sweep_finished", extra={"axis": sweep.axis_name, "points": completed})
    return SweepSummary(output_path=sweep.output_path, axis_name=sweep.axis_name, points_completed=completed)
