"""Load and list saved runs from disk (data/runs) for the UI."""

from pathlib import Path
from typing import Any, Optional

import pandas as pd

from microbench.artifacts import list_runs, load_results
from microbench.report import results_to_dataframe


def run_rows_from_disk(data_dir: str) -> list[dict[str, Any]]:
    """One row per saved run: id, time, n, case names."""
    rows = []
    for man in list_runs(data_dir):
        rows.append({
            "run_id": man.get("run_id", ""),
            "created_at": man.get("created_at", ""),
            "n": (man.get("extra") or {}).get("n"),
            "cases": ", ".join(man.get("cases", [])),
            "unit": (man.get("config") or {}).get("unit", ""),
        })
    return rows


def load_run_dataframe(data_dir: str, run_id: str) -> Optional[pd.DataFrame]:
    """Results of one saved run as a DataFrame, or None if the run is missing."""
    run_dir = Path(data_dir) / run_id
    if not (run_dir / "results.json").exists():
        return None
    return results_to_dataframe(load_results(str(run_dir)))
