"""Command line: compare curried vs adapted list reduce for a problem size n."""

import argparse
import logging
import sys
import uuid
from typing import Optional, Sequence

from pydantic import ValidationError

from microbench.artifacts import save_results
from microbench.errors import BenchmarkError
from microbench.experiment_config import RunSettings
from microbench.logging_utils import clear_run_log_path, configure_root_logging, set_run_log_path
from microbench.schemas import UNITS
from microbench.sweep import run_sweep, speedup
from workloads.cases import build_sum_runner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="microbench",
        description="Time sum over range(n) with a curried reducer (sum) and an adapted one (sumOpt).",
    )
    p.add_argument("n", type=int, help="problem size: length of the list to reduce")
    p.add_argument("--min-duration", type=float, default=0.1, help="seconds one timed batch must reach")
    p.add_argument("--min-iterations", type=int, default=1)
    p.add_argument("--max-iterations", type=int, default=2 ** 20)
    p.add_argument("--trials", type=int, default=10)
    p.add_argument("--warmup", type=int, default=1, help="untimed batches before the trials")
    p.add_argument("--confidence", type=float, default=0.999)
    p.add_argument("--unit", choices=UNITS, default="ms/op")
    p.add_argument("--precision", type=int, default=6)
    p.add_argument("--reverse", action="store_true", help="measure cases last to first")
    p.add_argument("--no-head", action="store_true", help="omit the table header")
    p.add_argument("--out-dir", default=None, help="save manifest/results under this directory")
    p.add_argument("--sweep", type=int, nargs="+", default=None, metavar="N",
                   help="additional sizes; prints per-size speedup of sumOpt over sum")
    p.add_argument("--log-level", default="WARNING")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_root_logging(getattr(logging, str(args.log_level).upper(), logging.WARNING))
    try:
        settings = RunSettings(
            n=args.n,
            min_duration_s=args.min_duration,
            min_iterations=args.min_iterations,
            max_iterations=args.max_iterations,
            trials=args.trials,
            warmup_batches=args.warmup,
            confidence=args.confidence,
            unit=args.unit,
            precision=args.precision,
            with_head=not args.no_head,
            reverse_order=args.reverse,
        )
        config = settings.to_run_config()
        if args.sweep and any(s < 0 for s in args.sweep):
            raise ValueError("sweep sizes must be >= 0")
    except (ValidationError, ValueError) as e:
        print(f"microbench: invalid arguments: {e}", file=sys.stderr)
        return 2

    try:
        if args.sweep:
            sizes = [settings.n] + [s for s in args.sweep if s != settings.n]
            df = run_sweep(sizes, config, build_sum_runner, out_dir=args.out_dir)
            print(speedup(df, "sum", "sumOpt").to_string(index=False))
            return 0

        runner = build_sum_runner(settings.n)
        if args.out_dir:
            run_id = str(uuid.uuid4())[:8]
            set_run_log_path(f"{args.out_dir}/{run_id}/run.log")
            try:
                records = runner.run_all(config, run_id=run_id)
            finally:
                clear_run_log_path()
            paths = save_results(records, config, args.out_dir, run_id=run_id, extra={"n": settings.n})
            logger.info("saved run %s to %s", run_id, paths["manifest"])
        else:
            runner.run_all(config)
    except BenchmarkError as e:
        logger.error("benchmark aborted: %s", e)
        print(f"microbench: {e}", file=sys.stderr)
        return 1
    return 0
