from __future__ import annotations

from collections.abc import Iterator

import pytest

from benchsweep.core.config import SweepConfig
from benchsweep.core.exceptions import SweepStateError
from benchsweep.core.types import SweepPoint
from benchsweep.sweep.generator import generate


def test_generate_one_point_per_value_in_order(sweep_config: SweepConfig) -> None:
    points = list(generate(sweep_config))
    assert [p.axis_value for p in points] == ["100", "200", "300"]
    assert all(p.axis_name == "target-qps" for p in points)
    assert all(p.axis_is_datagen_variable is False for p in points)


def test_generate_is_lazy(sweep_config: SweepConfig) -> None:
    it = generate(sweep_config)
    assert isinstance(it, Iterator)
    assert next(it) == SweepPoint("target-qps", "100", False)


def test_generate_is_restartable(sweep_config: SweepConfig) -> None:
    assert list(generate(sweep_config)) == list(generate(sweep_config))


def test_generate_carries_datagen_flag(tmp_path) -> None:
    cfg = SweepConfig(
        enabled=True,
        axis_name="row_count",
        axis_values="10,10,5",
        axis_is_datagen_variable=True,
        output_path=tmp_path / "o.csv",
    )
    points = list(cfg.points())
    assert len(points) == 3
    assert [p.axis_value for p in points] == ["10", "10", "5"]
    assert all(p.axis_is_datagen_variable for p in points)


def test_generate_disabled_fails_fast() -> None:
    with pytest.raises(SweepStateError):
        generate(SweepConfig())
