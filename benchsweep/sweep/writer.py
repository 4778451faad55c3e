"""benchsweep.sweep.writer

Results writers. The output path's extension picks the format, once, at open time.

CSV row layout (no header unless asked for):
- axis value
- per metric, sorted by name: count, min, max, mean, then one column per quantile

Each row is formatted in memory, written with a single call and flushed before
write_row returns. Rows already written survive a later failure.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import numbers
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from types import TracebackType
from typing import IO, Any, TypeAlias

import numpy as np

from benchsweep.core.exceptions import (
    FormatNotImplementedError,
    ResultsWriteError,
    UndetectableFormatError,
    UnsupportedFormatError,
)
from benchsweep.core.types import MetricSample, QuantileSpec

log = logging.getLogger(__name__)

SCALAR_COLUMNS = ("count", "min", "max", "mean")


class ResultsFormat(StrEnum):
    CSV = "csv"
    PNG = "png"

    @classmethod
    def from_path(cls, path: Path) -> ResultsFormat:
        suffix = path.suffix
        if not suffix:
            raise UndetectableFormatError(path)
        ext = suffix[1:]
        try:
            return cls(ext)
        except ValueError:
            raise UnsupportedFormatError(ext) from None


def format_number(v: Any) -> str:
    """Canonical decimal form: integral values without a fractional part."""

    if isinstance(v, numbers.Integral):
        return str(int(v))
    f = float(v)
    if math.isfinite(f) and f.is_integer():
        return str(int(f))
    # Positional, never scientific: 5e-05 -> 0.00005. nan and inf are written as "nan" and "inf".
    return np.format_float_positional(f, trim="-")


def summary_row(axis_value: str, metrics: Mapping[str, MetricSample], quantiles: QuantileSpec) -> list[str]:
    row = [axis_value]
    for _, sample in sorted(metrics.items(), key=lambda kv: kv[0]):
        row.append(format_number(sample.count()))
        row.append(format_number(sample.min()))
        row.append(format_number(sample.max()))
        row.append(format_number(sample.mean()))
        row.extend(format_number(sample.value_at_quantile(q)) for q in quantiles.fractions)
    return row


def header_row(axis_name: str | None, metric_names: list[str], quantiles: QuantileSpec) -> list[str]:
    row = [axis_name or "x_value"]
    for name in sorted(metric_names):
        row.extend(f"{name}_{col}" for col in SCALAR_COLUMNS)
        row.extend(f"{name}_{label}" for label in quantiles.labels)
    return row


class CsvResultsWriter:
    format = ResultsFormat.CSV

    def __init__(
        self,
        path: Path,
        fh: IO[str],
        quantiles: QuantileSpec,
        *,
        axis_name: str | None = None,
        header: bool = False,
    ) -> None:
        self.path = path
        self.quantiles = quantiles
        self.axis_name = axis_name
        self.header = header
        self.rows_written = 0
        self._fh: IO[str] | None = fh
        self._columns_for: tuple[str, ...] | None = None

    @property
    def closed(self) -> bool:
        return self._fh is None

    def _append(self, row: list[str], *, axis_value: str | None) -> None:
        if self._fh is None:
            raise ResultsWriteError(f"results writer for {self.path} is closed", path=self.path, axis_value=axis_value)

        buf = io.StringIO()
        csv.writer(buf, lineterminator="\n").writerow(row)
        try:
            self._fh.write(buf.getvalue())
            self._fh.flush()
        except OSError as e:
            where = f" for x value {axis_value!r}" if axis_value is not None else ""
            raise ResultsWriteError(
                f"failed to write results row{where} to {self.path}: {e}",
                path=self.path,
                axis_value=axis_value,
            ) from e

    def write_row(self, axis_value: str, metrics: Mapping[str, MetricSample]) -> None:
        names = tuple(sorted(metrics))
        row = summary_row(axis_value, metrics, self.quantiles)

        if self.header and self._columns_for is None:
            self._append(header_row(self.axis_name, list(names), self.quantiles), axis_value=None)
            self._columns_for = names
        elif self._columns_for is not None and names != self._columns_for:
            log.warning(
                "results_metrics_changed",
                extra={"path": str(self.path), "axis_value": axis_value, "metrics": list(names)},
            )

        self._append(row, axis_value=axis_value)
        self.rows_written += 1

    def close(self) -> None:
        if self._fh is None:
            return
        fh, self._fh = self._fh, None
        try:
            fh.flush()
        finally:
            fh.close()

    def __enter__(self) -> CsvResultsWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# Grows a member per live format.
ResultsWriter: TypeAlias = CsvResultsWriter


def open_results_writer(
    output_path: str | Path,
    quantiles: QuantileSpec,
    *,
    axis_name: str | None = None,
    header: bool = False,
) -> ResultsWriter:
    """Open a writer for `output_path`, inferring the format from its extension.

    Raises:
        UndetectableFormatError: the path has no extension.
        UnsupportedFormatError: the extension is not a known format.
        FormatNotImplementedError: PNG. Reserved; fatal for this path.
        ResultsWriteError: the file could not be created.
    """

    path = Path(output_path)
    fmt = ResultsFormat.from_path(path)

    if fmt is ResultsFormat.PNG:
        raise FormatNotImplementedError("PNG output not yet implemented")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = path.open("w", encoding="utf-8", newline="")
    except OSError as e:
        raise ResultsWriteError(f"could not open results file {path}: {e}", path=path) from e

    log.debug("results_writer_opened", extra={"path": str(path), "format": str(fmt)})
    return CsvResultsWriter(path, fh, quantiles, axis_name=axis_name, header=header)
