"""FastAPI: /run_benchmark, /runs, /health."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi import FastAPI, HTTPException

from microbench.artifacts import list_runs, save_results
from microbench.errors import OperationPanicked
from microbench.experiment_config import RunSettings
from workloads.cases import build_sum_runner


app = FastAPI(title="Microbench API", version="0.1.0")

DATA_DIR = ROOT / "data" / "runs"


class RunBenchmarkParams(RunSettings):
    save: bool = False


@app.get("/health")
def health():
    return {"status": "ok", "message": "Microbench API"}


@app.post("/run_benchmark")
def api_run_benchmark(params: RunBenchmarkParams):
    try:
        config = params.to_run_config()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    runner = build_sum_runner(params.n)
    try:
        records = runner.run_all(config, out=False)
    except OperationPanicked as e:
        raise HTTPException(status_code=500, detail=str(e))
    body = {"n": params.n, "records": [r.to_dict() for r in records]}
    if params.save:
        paths = save_results(records, config, str(DATA_DIR), extra={"n": params.n})
        body["artifacts"] = paths
    return body


@app.get("/runs")
def api_runs():
    return {"runs": list_runs(str(DATA_DIR))}
