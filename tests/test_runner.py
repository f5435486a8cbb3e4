"""Tests for the adaptive doubling runner, driven by a fake clock."""

import io
import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from microbench.errors import DuplicateCaseName, EmptyCaseSet, OperationPanicked
from microbench.runner import Runner
from microbench.schemas import RunConfig


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def op(self, cost: float, value=None):
        """Zero-arg operation that takes exactly `cost` seconds on this clock."""
        def _op():
            self.now += cost
            return value
        return _op


def _config(**kw) -> RunConfig:
    base = dict(min_duration_s=0.005, max_iterations=2 ** 20, trials=3, warmup_batches=0, unit="s/op")
    base.update(kw)
    return RunConfig(**base)


def test_register_rejects_duplicate_atomically():
    runner = Runner()
    first = lambda: 1
    runner.register("a", first)
    with pytest.raises(DuplicateCaseName):
        runner.register("a", lambda: 2)
    assert len(runner) == 1
    assert runner.cases[0].operation is first


def test_register_validates_name_and_operation():
    runner = Runner()
    with pytest.raises(ValueError):
        runner.register("", lambda: 1)
    with pytest.raises(TypeError):
        runner.register("x", 42)
    assert len(runner) == 0


def test_of_chains():
    runner = Runner().of("a", lambda: 1).of("b", lambda: 2)
    assert [c.name for c in runner.cases] == ["a", "b"]


def test_run_all_empty_raises():
    with pytest.raises(EmptyCaseSet):
        Runner().run_all(_config(), out=False)


@pytest.mark.parametrize("cost", [1e-7, 1e-6, 1e-4])
def test_constant_cost_converges(cost):
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("c", clock.op(cost))
    (rec,) = runner.run_all(_config(), out=False)
    assert rec.mean == pytest.approx(cost, rel=0.2)
    assert rec.unit == "s/op"
    assert rec.trials == 3
    assert len(rec.samples) == 3
    assert not rec.low_confidence
    assert rec.iterations * cost >= 0.005


@pytest.mark.parametrize("cost", [1e-9, 1e-6, 1e-3, 1.0])
@pytest.mark.parametrize("min_it,max_it", [(1, 1024), (3, 1000), (1024, 2 ** 20)])
def test_doubling_round_bound(cost, min_it, max_it):
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("c", clock.op(cost))
    cfg = _config(min_iterations=min_it, max_iterations=max_it, trials=1)
    iterations, _, rounds = runner.calibrate(runner.cases[0], cfg)
    assert rounds <= math.ceil(math.log2(max_it / min_it))
    assert min_it <= iterations <= max_it


def test_slow_op_measured_at_one_iteration():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("slow", clock.op(0.01))
    (rec,) = runner.run_all(_config(), out=False)
    assert rec.iterations == 1
    assert rec.calibration_rounds == 0
    assert not rec.low_confidence
    assert rec.mean == pytest.approx(0.01)


def test_ceiling_flags_low_confidence():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("tiny", clock.op(1e-9))
    out = io.StringIO()
    (rec,) = runner.run_all(_config(max_iterations=1024), out=out)
    assert rec.iterations == 1024
    assert rec.low_confidence
    assert "LowConfidence" in out.getvalue()


def test_cheap_and_costly_cases_in_registration_order():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("const", clock.op(1e-8, 42))
    runner.register("identity_list_sum", clock.op(1e-5, 499500))
    records = runner.run_all(_config(), out=False)
    assert [r.name for r in records] == ["const", "identity_list_sum"]
    assert records[0].iterations >= 2 ** 19
    assert records[1].iterations <= 1024
    assert records[0].iterations > 100 * records[1].iterations


def test_results_follow_registration_not_duration():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("slow", clock.op(1e-3))
    runner.register("fast", clock.op(1e-7))
    runner.register("medium", clock.op(1e-5))
    records = runner.run_all(_config(), out=False)
    assert [r.name for r in records] == ["slow", "fast", "medium"]


def test_reverse_order_executes_backwards_and_matches_forward():
    clock = FakeClock()
    seen = []

    def tracked(name, cost):
        inner = clock.op(cost)

        def _op():
            if not seen or seen[-1] != name:
                seen.append(name)
            return inner()
        return _op

    runner = Runner(clock=clock)
    runner.register("a", tracked("a", 1e-5))
    runner.register("b", tracked("b", 1e-4))
    forward = runner.run_all(_config(), out=False)
    assert seen == ["a", "b"]
    seen.clear()
    backward = runner.run_all(_config(reverse_order=True), out=False)
    assert seen == ["b", "a"]
    assert [r.name for r in backward] == ["a", "b"]
    for f, b in zip(forward, backward):
        assert b.mean == pytest.approx(f.mean, rel=0.05)
        assert b.iterations == f.iterations


def test_raising_operation_aborts_without_report():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("ok", clock.op(1e-3))

    def boom():
        raise ZeroDivisionError("nope")

    runner.register("boom", boom)
    out = io.StringIO()
    with pytest.raises(OperationPanicked) as exc_info:
        runner.run_all(_config(), out=out)
    assert exc_info.value.case_name == "boom"
    assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
    assert out.getvalue() == ""


def test_results_are_consumed_and_immutable():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("const", clock.op(1e-3, 42))
    (rec,) = runner.run_all(_config(), out=False)
    assert runner.blackhole.last == 42
    assert runner.blackhole.consumed > 0
    with pytest.raises(AttributeError):
        rec.mean = 0.0


def test_warmup_batches_do_not_change_iterations():
    clock = FakeClock()
    runner = Runner(clock=clock)
    runner.register("c", clock.op(1e-5))
    (cold,) = runner.run_all(_config(warmup_batches=0), out=False)
    (warm,) = runner.run_all(_config(warmup_batches=3), out=False)
    assert cold.iterations == warm.iterations


def test_report_written_with_real_clock():
    runner = Runner()
    runner.register("const", lambda: 42)
    runner.register("identity_list_sum", lambda: sum(range(1000)))
    out = io.StringIO()
    records = runner.run_all(RunConfig(min_duration_s=0.001, max_iterations=2 ** 16, trials=3), out=out)
    lines = out.getvalue().splitlines()
    assert lines[0].split() == ["Benchmark", "Mean", "Mean-Error", "Sdev", "Unit", "Count"]
    assert lines[1].startswith("const")
    assert lines[2].startswith("identity_list_sum")
    assert all(r.mean > 0 for r in records)
    assert records[0].iterations >= records[1].iterations
