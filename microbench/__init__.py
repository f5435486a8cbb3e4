"""Adaptive microbenchmark runner, statistics and reporting."""

from microbench.schemas import BenchmarkCase, RunConfig, ResultRecord
from microbench.errors import BenchmarkError, DuplicateCaseName, EmptyCaseSet, OperationPanicked
from microbench.runner import Runner
from microbench.report import format_table, results_to_dataframe

__all__ = [
    "BenchmarkCase",
    "RunConfig",
    "ResultRecord",
    "BenchmarkError",
    "DuplicateCaseName",
    "EmptyCaseSet",
    "OperationPanicked",
    "Runner",
    "format_table",
    "results_to_dataframe",
]
