"""Case builders for the bundled workloads."""

from typing import Optional

from microbench.runner import Runner
from workloads.reduce import add, reduce_opt, reduce_std


def build_sum_runner(n: int, runner: Optional[Runner] = None) -> Runner:
    """Register "sum" (curried reduce) and "sumOpt" (adapted reduce) over range(n)."""
    if n < 0:
        raise ValueError("n must be >= 0")
    xs = list(range(n))
    runner = runner if runner is not None else Runner()
    runner.register("sum", lambda: reduce_std(add, 0, xs))
    runner.register("sumOpt", lambda: reduce_opt(add, 0, xs))
    return runner
