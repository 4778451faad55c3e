"""benchsweep.sweep.executors

The executor contract, and loading one from a `module:attr` reference.

The executor is the thing that actually runs the benchmark. The sweep only hands
it an override and reads back its results.
"""

from __future__ import annotations

import importlib
import inspect
from typing import Protocol, runtime_checkable

from benchsweep.core.exceptions import ExecutorLoadError
from benchsweep.core.types import BenchmarkResults
from benchsweep.sweep.overrides import OverrideInstruction


@runtime_checkable
class BenchmarkExecutor(Protocol):
    def run(self, instruction: OverrideInstruction) -> BenchmarkResults: ...


def load_executor(ref: str) -> BenchmarkExecutor:
    """Resolve `package.module:attr`.

    Classes and zero-argument factories are called; anything else is used as is.
    The result must expose a callable `run`.
    """

    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise ExecutorLoadError(f"executor reference must look like 'package.module:attr', got {ref!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ExecutorLoadError(f"could not import executor module {module_name!r}: {e}") from e
    except Exception as e:
        raise ExecutorLoadError(f"executor module {module_name!r} failed to load: {type(e).__name__}: {e}") from e

    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ExecutorLoadError(f"{module_name!r} has no attribute {attr!r}") from e

    if inspect.isclass(target) or (callable(target) and not hasattr(target, "run")):
        try:
            target = target()
        except TypeError as e:
            raise ExecutorLoadError(f"executor factory {ref!r} must take no arguments: {e}") from e
        except Exception as e:
            raise ExecutorLoadError(f"executor factory {ref!r} failed: {type(e).__name__}: {e}") from e

    if not callable(getattr(target, "run", None)):
        raise ExecutorLoadError(f"executor {ref!r} does not expose run()")
    return target
