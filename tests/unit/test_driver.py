from __future__ import annotations

import csv
import logging
from pathlib import Path

import pytest

from benchsweep.core.config import SweepConfig
from benchsweep.core.exceptions import FormatNotImplementedError, SweepStateError
from benchsweep.core.types import BenchmarkResults, QuantileSpec
from benchsweep.sweep.driver import plan_sweep, run_sweep
from benchsweep.sweep.overrides import CliTokens, StructuredPatch
from conftest import RecordingExecutor


def _rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_run_sweep_writes_one_row_per_point_in_order(
    sweep_config: SweepConfig, executor: RecordingExecutor, quantiles: QuantileSpec
) -> None:
    summary = run_sweep(sweep_config, executor, quantiles=quantiles)

    assert summary.points_completed == 3
    assert summary.axis_name == "target-qps"
    assert summary.output_path == sweep_config.output_path

    rows = _rows(sweep_config.output_path)
    assert [r[0] for r in rows] == ["100", "200", "300"]
    # two metrics, each 4 scalars + 2 quantiles
    assert all(len(r) == 1 + 2 * 6 for r in rows)
    # "read" sorts before "write"
    assert rows[0][1] == "100"
    assert rows[0][7] == "3"


def test_run_sweep_hands_cli_tokens_to_executor(
    sweep_config: SweepConfig, executor: RecordingExecutor, quantiles: QuantileSpec
) -> None:
    run_sweep(sweep_config, executor, quantiles=quantiles)
    assert executor.instructions == [
        CliTokens(("benchmarks", "--target-qps", "100")),
        CliTokens(("benchmarks", "--target-qps", "200")),
        CliTokens(("benchmarks", "--target-qps", "300")),
    ]


def test_run_sweep_hands_patches_for_datagen_axis(
    tmp_path: Path, executor: RecordingExecutor, quantiles: QuantileSpec
) -> None:
    cfg = SweepConfig(
        enabled=True,
        axis_name="row_count",
        axis_values="10,20",
        axis_is_datagen_variable=True,
        output_path=tmp_path / "rows.csv",
    )
    run_sweep(cfg, executor, quantiles=quantiles)
    assert executor.instructions == [StructuredPatch("row_count", "10"), StructuredPatch("row_count", "20")]


def test_run_sweep_aborts_at_first_failure_and_keeps_rows(
    sweep_config: SweepConfig, quantiles: QuantileSpec
) -> None:
    executor = RecordingExecutor(fail_on="200")

    with pytest.raises(RuntimeError) as e:
        run_sweep(sweep_config, executor, quantiles=quantiles)

    assert "blew up" in str(e.value)
    assert any("target-qps='200'" in n for n in e.value.__notes__)
    assert len(executor.instructions) == 2
    assert [r[0] for r in _rows(sweep_config.output_path)] == ["100"]


def test_run_sweep_logs_failure(
    sweep_config: SweepConfig, quantiles: QuantileSpec, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="benchsweep"):
        with pytest.raises(RuntimeError):
            run_sweep(sweep_config, RecordingExecutor(fail_on="300"), quantiles=quantiles)

    events = [r.getMessage() for r in caplog.records]
    assert events.count("sweep_point_done") == 2
    assert "sweep_point_failed" in events
    assert "sweep_finished" not in events


def test_bad_format_fails_before_executor_runs(tmp_path: Path, executor: RecordingExecutor, quantiles: QuantileSpec) -> None:
    cfg = SweepConfig(enabled=True, axis_name="a", axis_values="1", output_path=tmp_path / "out.png")
    with pytest.raises(FormatNotImplementedError):
        run_sweep(cfg, executor, quantiles=quantiles)
    assert executor.instructions == []


def test_run_sweep_disabled_is_a_state_error(executor: RecordingExecutor, quantiles: QuantileSpec) -> None:
    with pytest.raises(SweepStateError):
        run_sweep(SweepConfig(), executor, quantiles=quantiles)


def test_run_sweep_with_header(sweep_config: SweepConfig, executor: RecordingExecutor, quantiles: QuantileSpec) -> None:
    run_sweep(sweep_config, executor, quantiles=quantiles, header=True)
    rows = _rows(sweep_config.output_path)
    assert rows[0][:2] == ["target-qps", "read_count"]
    assert len(rows) == 4


class _EmptyExecutor:
    def run(self, instruction):
        return BenchmarkResults()


def test_run_sweep_with_no_metrics(sweep_config: SweepConfig, quantiles: QuantileSpec) -> None:
    run_sweep(sweep_config, _EmptyExecutor(), quantiles=quantiles)
    assert _rows(sweep_config.output_path) == [["100"], ["200"], ["300"]]


def test_plan_sweep_encodes_without_running(sweep_config: SweepConfig) -> None:
    plan = plan_sweep(sweep_config)
    assert [p.tokens[-1] for p in plan if isinstance(p, CliTokens)] == ["100", "200", "300"]
    assert not sweep_config.output_path.exists()
