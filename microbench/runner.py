"""Benchmark runner: register cases, calibrate by doubling, measure trials, report."""

import itertools
import sys
import time
import uuid
from typing import Any, Callable, Optional, TextIO, Union

from microbench.errors import DuplicateCaseName, EmptyCaseSet, OperationPanicked
from microbench.logging_utils import run_log
from microbench.report import format_table
from microbench.schemas import BenchmarkCase, ResultRecord, RunConfig
from microbench.stats import mean, mean_error, sdev, unit_scale


class Blackhole:
    """Sink for operation results so each timed call is observably consumed."""

    def __init__(self):
        self.last: Any = None
        self.consumed = 0

    def consume(self, value: Any) -> None:
        self.last = value
        self.consumed += 1


class Runner:
    """Ordered set of benchmark cases, measured one at a time on a single thread."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._cases: list[BenchmarkCase] = []
        self.blackhole = Blackhole()

    @property
    def cases(self) -> tuple[BenchmarkCase, ...]:
        return tuple(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def register(self, name: str, operation: Callable[[], Any]) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("benchmark case name must be a non-empty string")
        if not callable(operation):
            raise TypeError(f"operation for {name!r} is not callable")
        if any(c.name == name for c in self._cases):
            raise DuplicateCaseName(name)
        self._cases.append(BenchmarkCase(name=name, operation=operation))

    def of(self, name: str, operation: Callable[[], Any]) -> "Runner":
        """Chaining form of register: Runner().of("a", f).of("b", g).run_all()."""
        self.register(name, operation)
        return self

    def _time_batch(self, case: BenchmarkCase, iterations: int) -> float:
        op = case.operation
        clock = self._clock
        result = None
        try:
            start = clock()
            for _ in itertools.repeat(None, iterations):
                result = op()
            elapsed = clock() - start
        except Exception as exc:
            raise OperationPanicked(case.name, exc) from exc
        self.blackhole.consume(result)
        return elapsed

    def calibrate(self, case: BenchmarkCase, config: RunConfig) -> tuple[int, float, int]:
        """Double the batch size until one batch takes min_duration_s or the ceiling is hit.

        Returns (iterations, elapsed of the last probe, number of doublings).
        """
        iterations = config.min_iterations
        rounds = 0
        elapsed = self._time_batch(case, iterations)
        while elapsed < config.min_duration_s and iterations < config.max_iterations:
            iterations = min(iterations * 2, config.max_iterations)
            rounds += 1
            elapsed = self._time_batch(case, iterations)
        return iterations, elapsed, rounds

    def measure(self, case: BenchmarkCase, config: RunConfig, run_id: Optional[str] = None) -> ResultRecord:
        iterations, elapsed, rounds = self.calibrate(case, config)
        low_confidence = elapsed < config.min_duration_s
        run_log("case_calibrated", run_id=run_id, case=case.name, iterations=iterations,
                rounds=rounds, elapsed_s=elapsed)
        if low_confidence:
            run_log("low_confidence", level="warning", run_id=run_id, case=case.name,
                    iterations=iterations, elapsed_s=elapsed, min_duration_s=config.min_duration_s)

        for _ in range(config.warmup_batches):
            self._time_batch(case, iterations)

        scale = unit_scale(config.unit)
        samples = tuple(
            self._time_batch(case, iterations) / iterations * scale
            for _ in range(config.trials)
        )
        record = ResultRecord(
            name=case.name,
            mean=mean(samples),
            error=mean_error(samples, config.confidence),
            sdev=sdev(samples),
            unit=config.unit,
            iterations=iterations,
            trials=config.trials,
            calibration_rounds=rounds,
            low_confidence=low_confidence,
            samples=samples,
        )
        run_log("case_done", run_id=run_id, case=case.name, mean=record.mean, error=record.error,
                sdev=record.sdev, unit=record.unit, iterations=iterations)
        return record

    def run_all(
        self,
        config: Optional[RunConfig] = None,
        out: Union[TextIO, bool, None] = None,
        run_id: Optional[str] = None,
    ) -> list[ResultRecord]:
        """Measure every case and return records in registration order.

        The report is written to `out` (stdout when None, nothing when False)
        only after all cases have completed.
        """
        if not self._cases:
            raise EmptyCaseSet()
        config = config or RunConfig()
        run_id = run_id or str(uuid.uuid4())[:8]
        run_log("run_start", run_id=run_id, cases=[c.name for c in self._cases], **config.to_dict())

        order = list(range(len(self._cases)))
        if config.reverse_order:
            order.reverse()
        by_index: dict[int, ResultRecord] = {}
        for i in order:
            case = self._cases[i]
            try:
                by_index[i] = self.measure(case, config, run_id=run_id)
            except OperationPanicked as exc:
                run_log("case_failed", level="error", run_id=run_id, case=case.name, error=str(exc.cause))
                raise
        records = [by_index[i] for i in range(len(self._cases))]
        run_log("run_end", run_id=run_id, n_cases=len(records),
                low_confidence=[r.name for r in records if r.low_confidence])

        if out is not False:
            stream = sys.stdout if out is None or out is True else out
            stream.write(format_table(records, precision=config.precision, with_head=config.with_head))
            stream.flush()
        return records
