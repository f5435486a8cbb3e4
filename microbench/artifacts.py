"""Write per-run artifacts: manifest.json, results.json, results.csv."""

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from microbench.experiment_config import RunManifest, stable_config_hash
from microbench.report import results_to_dataframe
from microbench.schemas import ResultRecord, RunConfig


def save_results(
    records: Sequence[ResultRecord],
    config: RunConfig,
    out_dir: str = "data/runs",
    run_id: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> dict:
    """Write the run under out_dir/<run_id>/. Returns artifact paths."""
    run_id = run_id or str(uuid.uuid4())[:8]
    run_dir = Path(out_dir) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    config_dict = config.to_dict()

    manifest = RunManifest(
        run_id=run_id,
        config_hash=stable_config_hash({**config_dict, **(extra or {})}),
        created_at=datetime.now(tz=timezone.utc).isoformat(),
        config=config_dict,
        cases=[r.name for r in records],
        summary={
            r.name: {
                "mean": r.mean,
                "error": r.error,
                "unit": r.unit,
                "count": r.iterations,
                "low_confidence": r.low_confidence,
            }
            for r in records
        },
        extra=dict(extra or {}),
    )

    results_json = os.path.join(run_dir, "results.json")
    with open(results_json, "w") as f:
        json.dump({"run_id": run_id, "records": [r.to_dict() for r in records]}, f, indent=2)
    manifest.artifacts["results_json"] = results_json

    results_csv = os.path.join(run_dir, "results.csv")
    results_to_dataframe(records).to_csv(results_csv, index=False)
    manifest.artifacts["results_csv"] = results_csv

    run_log_path = os.path.join(run_dir, "run.log")
    if os.path.exists(run_log_path):
        manifest.artifacts["run_log"] = run_log_path

    manifest_path = os.path.join(run_dir, "manifest.json")
    manifest.artifacts["manifest"] = manifest_path
    with open(manifest_path, "w") as f:
        f.write(manifest.model_dump_json(indent=2))

    return dict(manifest.artifacts)


def load_results(run_dir: str) -> list[ResultRecord]:
    """Load the ResultRecords saved by save_results."""
    with open(Path(run_dir) / "results.json") as f:
        data = json.load(f)
    return [ResultRecord.from_dict(r) for r in data.get("records", [])]


def load_manifest(run_dir: str) -> RunManifest:
    with open(Path(run_dir) / "manifest.json") as f:
        return RunManifest.model_validate_json(f.read())


def list_runs(out_dir: str = "data/runs") -> list[dict]:
    """Manifests of all runs under out_dir, newest first. Unreadable manifests are skipped."""
    out = []
    p = Path(out_dir)
    if not p.exists():
        return out
    for m_path in p.glob("*/manifest.json"):
        try:
            with open(m_path) as fp:
                out.append(json.load(fp))
        except (OSError, json.JSONDecodeError):
            continue
    out.sort(key=lambda m: m.get("created_at", ""), reverse=True)
    return out
