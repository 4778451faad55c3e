"""benchsweep.core.config

Two config surfaces only:
1) `config/default.yaml` (quantiles, output, logging)
2) Environment variables (`BENCHSWEEP_*`, nested with `__`)

Sweep flags are per invocation and live in `SweepConfig`, never in YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

from benchsweep.core.exceptions import ConfigError, SweepConfigError
from benchsweep.core.types import DEFAULT_QUANTILES, QuantileSpec


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


class QuantileEntry(BaseModel):
    label: str = Field(min_length=1)
    fraction: float = Field(ge=0.0, le=1.0)


class OutputConfig(BaseModel):
    csv_header: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class SweepConfig(BaseModel):
    """One axis, its values, and where the rows go.

    Either the sweep is enabled and axis_name, axis_values and output_path are all
    set, or it is disabled and none of them are.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    axis_name: str | None = None
    axis_values: tuple[str, ...] | None = None
    axis_is_datagen_variable: bool = False
    output_path: Path | None = None

    @field_validator("axis_values", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Any) -> Any:
        # Values are handed to the executor verbatim; no trimming.
        if isinstance(v, str):
            return tuple(v.split(","))
        return v

    @model_validator(mode="after")
    def all_or_nothing(self) -> SweepConfig:
        dependent = {
            "axis_name": self.axis_name,
            "axis_values": self.axis_values,
            "output_path": self.output_path,
        }
        if self.enabled:
            missing = [name for name, value in dependent.items() if value is None]
            if missing:
                raise ValueError(f"enabled sweep requires {', '.join(missing)}")
            if not self.axis_name:
                raise ValueError("axis_name must be non-empty")
            if not self.axis_values:
                raise ValueError("axis_values must contain at least one value")
        else:
            given = [name for name, value in dependent.items() if value is not None]
            if self.axis_is_datagen_variable:
                given.append("axis_is_datagen_variable")
            if given:
                raise ValueError(f"{', '.join(given)} given but the sweep is not enabled")
        return self

    @classmethod
    def from_flags(
        cls,
        *,
        graph: bool = False,
        x_axis: str | None = None,
        x_values: str | list[str] | None = None,
        x_axis_is_datagen_var: bool = False,
        graph_results_path: str | Path | None = None,
    ) -> SweepConfig:
        """Build from command-line style flags, raising SweepConfigError on partial input."""

        try:
            return cls(
                enabled=graph,
                axis_name=x_axis,
                axis_values=x_values,
                axis_is_datagen_variable=x_axis_is_datagen_var,
                output_path=graph_results_path,
            )
        except ValidationError as e:
            messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
            raise SweepConfigError(f"invalid sweep configuration: {messages}") from e

    def points(self):
        from benchsweep.sweep.generator import generate

        return generate(self)


def _default_quantiles() -> list[QuantileEntry]:
    return [QuantileEntry(label=label, fraction=fraction) for label, fraction in DEFAULT_QUANTILES]


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    quantiles: list[QuantileEntry] = Field(default_factory=_default_quantiles)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_prefix": "BENCHSWEEP_", "env_nested_delimiter": "__"}

    @field_validator("quantiles", mode="after")
    @classmethod
    def quantile_labels_unique(cls, v: list[QuantileEntry]) -> list[QuantileEntry]:
        labels = [q.label for q in v]
        dupes = sorted({label for label in labels if labels.count(label) > 1})
        if dupes:
            raise ValueError(f"duplicate quantile labels: {', '.join(dupes)}")
        return v

    def quantile_spec(self) -> QuantileSpec:
        try:
            return QuantileSpec.of((q.label, q.fraction) for q in self.quantiles)
        except ValueError as e:
            raise ConfigError(f"Invalid quantiles: {e}") from e

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")

        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        default_path = root / "config" / "default.yaml"
        if not default_path.exists():
            return cls()
        return cls.from_yaml(default_path)
