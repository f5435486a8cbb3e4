"""Comparison table and DataFrame views of result records."""

from typing import Sequence

import pandas as pd

from microbench.schemas import ResultRecord

COLUMNS = ("Benchmark", "Mean", "Mean-Error", "Sdev", "Unit", "Count")
LOW_CONFIDENCE_MARKER = "LowConfidence"


def format_table(records: Sequence[ResultRecord], precision: int = 6, with_head: bool = True) -> str:
    """Render records as a fixed-column text table, one line per record."""
    rows = []
    for r in records:
        row = [
            r.name,
            f"{r.mean:.{precision}f}",
            f"{r.error:.{precision}f}",
            f"{r.sdev:.{precision}f}",
            r.unit,
            str(r.iterations),
        ]
        if r.low_confidence:
            row.append(LOW_CONFIDENCE_MARKER)
        rows.append(row)

    widths = [len(c) for c in COLUMNS]
    for row in rows:
        for i, cell in enumerate(row[:len(COLUMNS)]):
            widths[i] = max(widths[i], len(cell))

    def fmt(cells: Sequence[str]) -> str:
        # name left-aligned, numbers right-aligned
        parts = [cells[0].ljust(widths[0])]
        parts += [c.rjust(w) for c, w in zip(cells[1:len(COLUMNS)], widths[1:])]
        parts += list(cells[len(COLUMNS):])
        return "  ".join(parts).rstrip()

    lines = [fmt(COLUMNS)] if with_head else []
    lines += [fmt(row) for row in rows]
    return "\n".join(lines) + "\n"


def results_to_dataframe(records: Sequence[ResultRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        rows.append({
            "benchmark": r.name,
            "mean": r.mean,
            "mean_error": r.error,
            "sdev": r.sdev,
            "unit": r.unit,
            "count": r.iterations,
            "trials": r.trials,
            "calibration_rounds": r.calibration_rounds,
            "low_confidence": r.low_confidence,
        })
    return pd.DataFrame(rows, columns=[
        "benchmark", "mean", "mean_error", "sdev", "unit", "count",
        "trials", "calibration_rounds", "low_confidence",
    ])
