"""Size sweep: run the same comparison for several problem sizes and aggregate."""

import hashlib
import json
import os
import uuid
from pathlib import Path
from typing import Callable, Optional, Sequence

import pandas as pd

from microbench.logging_utils import clear_run_log_path, run_log, set_run_log_path
from microbench.report import results_to_dataframe
from microbench.runner import Runner
from microbench.schemas import RunConfig


def run_sweep(
    sizes: Sequence[int],
    config: RunConfig,
    build_runner: Callable[[int], Runner],
    out_dir: Optional[str] = None,
) -> pd.DataFrame:
    """One fresh Runner per size; returns one row per (size, case).

    With out_dir, writes suite_<id>_aggregated.csv and suite_<id>_manifest.json there.
    """
    if not sizes:
        raise ValueError("sizes must not be empty")
    sweep_id = str(uuid.uuid4())[:8]
    if out_dir:
        Path(out_dir).mkdir(parents=True, exist_ok=True)
        set_run_log_path(os.path.join(out_dir, f"suite_{sweep_id}.log"))
    frames = []
    try:
        for n in sizes:
            runner = build_runner(n)
            records = runner.run_all(config, out=False, run_id=f"{sweep_id}-n{n}")
            df = results_to_dataframe(records)
            df.insert(0, "n", n)
            frames.append(df)
            run_log("sweep_size_done", run_id=sweep_id, n=n, cases=len(records))
    finally:
        if out_dir:
            clear_run_log_path()
    agg = pd.concat(frames, ignore_index=True)

    if out_dir:
        csv_path = os.path.join(out_dir, f"suite_{sweep_id}_aggregated.csv")
        agg.to_csv(csv_path, index=False)
        config_hash = hashlib.sha256(json.dumps({
            "sizes": list(sizes),
            "config": config.to_dict(),
        }, sort_keys=True).encode()).hexdigest()[:16]
        manifest = {
            "suite_run_id": sweep_id,
            "config_hash": config_hash,
            "sizes": list(sizes),
            "n_rows": len(agg),
            "aggregated_csv": csv_path,
        }
        with open(os.path.join(out_dir, f"suite_{sweep_id}_manifest.json"), "w") as f:
            json.dump(manifest, f, indent=2)
    return agg


def speedup(df: pd.DataFrame, baseline: str, candidate: str) -> pd.DataFrame:
    """Per size: baseline mean / candidate mean (>1 means the candidate is faster)."""
    pivot = df.pivot_table(index="n", columns="benchmark", values="mean")
    missing = {baseline, candidate} - set(pivot.columns)
    if missing:
        raise KeyError(f"benchmarks not in sweep: {sorted(missing)}")
    out = pivot[[baseline, candidate]].copy()
    out["speedup"] = out[baseline] / out[candidate]
    return out.reset_index()
