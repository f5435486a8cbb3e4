"""Tests for the command line entry point."""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from microbench.cli import main

FAST = ["--min-duration", "0.001", "--max-iterations", "256", "--trials", "2", "--warmup", "0"]


def test_cli_prints_table(capsys):
    assert main(["50"] + FAST) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].split() == ["Benchmark", "Mean", "Mean-Error", "Sdev", "Unit", "Count"]
    assert out[1].startswith("sum ")
    assert out[2].startswith("sumOpt")


def test_cli_no_head(capsys):
    assert main(["5", "--no-head"] + FAST) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2


def test_cli_invalid_settings(capsys):
    assert main(["10", "--trials", "0"]) == 2
    assert "invalid arguments" in capsys.readouterr().err


def test_cli_saves_run(tmp_path):
    assert main(["20", "--out-dir", str(tmp_path)] + FAST) == 0
    (run_dir,) = [p for p in tmp_path.iterdir() if p.is_dir()]
    assert os.path.exists(run_dir / "manifest.json")
    assert os.path.exists(run_dir / "run.log")


def test_cli_sweep(capsys):
    assert main(["10", "--sweep", "20"] + FAST) == 0
    out = capsys.readouterr().out
    assert "speedup" in out
