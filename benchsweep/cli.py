"""benchsweep.cli

Command line interface entry point for benchsweep.

Design constraints:
- argparse-based.
- Lazy imports: do not import numpy or the executor at parse time.
"""

from __future__ import annotations

import argparse
import json
import shlex
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

EPILOG = "One axis, many runs. Everything else stays fixed."


@dataclass(frozen=True)
class CliContext:
    repo_root: Path


def _repo_root_from_cwd() -> Path:
    return Path.cwd()


def _add_sweep_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--graph",
        action="store_true",
        help="Run one benchmark per value of --x-axis given by --x-values, writing rows to --graph-results-path.",
    )
    p.add_argument(
        "--x-axis",
        default=None,
        help="Axis to vary: a long flag of the benchmark command without the leading '--' (eg: target-qps).",
    )
    p.add_argument(
        "--x-values",
        default=None,
        help="Comma-separated values for --x-axis.",
    )
    p.add_argument(
        "--x-axis-is-datagen-var",
        action="store_true",
        help="The axis is a data generation variable rather than a benchmark flag.",
    )
    p.add_argument(
        "--graph-results-path",
        default=None,
        help="File to write results to. Currently accepts .csv files.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="benchsweep",
        description="Benchmark sweeps over a single axis, summarized one row per run.",
        epilog=EPILOG,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: config/default.yaml if present).",
    )

    sub = parser.add_subparsers(dest="command")

    p_plan = sub.add_parser("plan", help="Print the override for every sweep point without running anything")
    _add_sweep_flags(p_plan)
    p_plan.add_argument("--json", action="store_true", help="Emit JSON.")

    p_sweep = sub.add_parser("sweep", help="Run the sweep and write one results row per point")
    _add_sweep_flags(p_sweep)
    p_sweep.add_argument(
        "--executor",
        required=True,
        help="Benchmark executor as 'package.module:attr'.",
    )

    return parser


def _print_version() -> None:
    from benchsweep import __version__

    print(f"benchsweep v{__version__}")


def _load_config(ctx: CliContext, args: argparse.Namespace):
    from benchsweep.core.config import Config

    if args.config:
        return Config.from_yaml(Path(args.config))
    return Config.from_repo_defaults(ctx.repo_root)


def _sweep_config(args: argparse.Namespace):
    from benchsweep.core.config import SweepConfig
    from benchsweep.core.exceptions import SweepConfigError

    sweep = SweepConfig.from_flags(
        graph=bool(args.graph),
        x_axis=args.x_axis,
        x_values=args.x_values,
        x_axis_is_datagen_var=bool(args.x_axis_is_datagen_var),
        graph_results_path=args.graph_results_path,
    )
    if not sweep.enabled:
        raise SweepConfigError("nothing to sweep: pass --graph, --x-axis, --x-values and --graph-results-path")
    return sweep


def _cmd_plan(ctx: CliContext, args: argparse.Namespace) -> int:
    from benchsweep.core.exceptions import BenchsweepError
    from benchsweep.sweep.driver import plan_sweep
    from benchsweep.sweep.overrides import CliTokens

    try:
        sweep = _sweep_config(args)
    except BenchsweepError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    plan = plan_sweep(sweep)
    values = sweep.axis_values or ()

    if args.json:
        payload = [{"x_value": v, **instr.to_json()} for v, instr in zip(values, plan, strict=True)]
        print(json.dumps(payload, indent=2))
        return 0

    for instr in plan:
        if isinstance(instr, CliTokens):
            print(shlex.join(instr.tokens))
        else:
            print(json.dumps(instr.values, sort_keys=True))
    return 0


def _cmd_sweep(ctx: CliContext, args: argparse.Namespace) -> int:
    from benchsweep.core.exceptions import BenchsweepError, ResultsWriteError
    from benchsweep.core.logs import configure_logging
    from benchsweep.sweep.driver import run_sweep
    from benchsweep.sweep.executors import load_executor
    from benchsweep.sweep.writer import ResultsFormat

    try:
        config = _load_config(ctx, args)
        quantiles = config.quantile_spec()
        sweep = _sweep_config(args)
        # Reject unusable output paths before importing the executor.
        ResultsFormat.from_path(sweep.output_path)
        executor = load_executor(args.executor)
    except BenchsweepError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logger = configure_logging(config.logging)

    try:
        summary = run_sweep(
            sweep,
            executor,
            quantiles=quantiles,
            header=config.output.csv_header,
            logger=logger,
        )
    except ResultsWriteError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except BenchsweepError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"sweep failed: {type(e).__name__}: {e}", file=sys.stderr)
        for note in getattr(e, "__notes__", ()):
            print(f"  {note}", file=sys.stderr)
        return 1

    print(f"wrote {summary.points_completed} rows to {summary.output_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    ctx = CliContext(repo_root=_repo_root_from_cwd())

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], int]] = {
        "plan": _cmd_plan,
        "sweep": _cmd_sweep,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 2

    return int(fn(ctx, args))


if __name__ == "__main__":
    raise SystemExit(main())
