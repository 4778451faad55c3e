"""benchsweep.sweep.overrides

Override instructions: how one sweep point is handed to the executor.

Two shapes, two consumers:
- CliTokens: re-parsed by the executor's own flag parser
- StructuredPatch: merged into the executor's data-generation config

They are never interchangeable. Dispatch on the type.
"""

from __future__ import annotations

import argparse
import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from benchsweep import PROGRAM_NAME
from benchsweep.core.config import deep_merge
from benchsweep.core.types import SweepPoint


@dataclass(frozen=True, slots=True)
class CliTokens:
    tokens: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        """Tokens without the synthetic program name."""

        return list(self.tokens[1:])

    def apply(self, parser: argparse.ArgumentParser, base: argparse.Namespace | None = None) -> argparse.Namespace:
        """Re-parse the override on top of a copy of `base`.

        Attributes already present on `base` keep their values unless overridden;
        `base` itself is not modified.
        """

        namespace = copy.copy(base) if base is not None else argparse.Namespace()
        return parser.parse_args(self.argv, namespace=namespace)

    def to_json(self) -> dict[str, Any]:
        return {"cli_args": list(self.tokens)}


@dataclass(frozen=True, slots=True)
class StructuredPatch:
    key: str
    value: str

    @property
    def values(self) -> dict[str, str]:
        return {self.key: self.value}

    def apply(self, base: Mapping[str, Any]) -> dict[str, Any]:
        """Merge into a copy of a data-generation config mapping."""

        return deep_merge(copy.deepcopy(dict(base)), self.values)

    def to_json(self) -> dict[str, Any]:
        return {"datagen": self.values}


OverrideInstruction: TypeAlias = CliTokens | StructuredPatch


def encode(point: SweepPoint) -> OverrideInstruction:
    if point.axis_is_datagen_variable:
        return StructuredPatch(key=point.axis_name, value=point.axis_value)
    return CliTokens(tokens=(PROGRAM_NAME, f"--{point.axis_name}", point.axis_value))
