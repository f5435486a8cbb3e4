"""Operations to benchmark: curried vs adapted reducers over a list."""

from workloads.reduce import Curried, curry2, adapt, reduce_std, reduce_opt
from workloads.cases import build_sum_runner

__all__ = ["Curried", "curry2", "adapt", "reduce_std", "reduce_opt", "build_sum_runner"]
