"""Validated RunSettings (pydantic) and RunManifest with stable hashing."""

import hashlib
import json
from typing import Any, Literal

from pydantic import BaseModel, Field

from microbench.schemas import RunConfig


class RunSettings(BaseModel):
    """User-facing run settings. Same settings => same config hash."""

    n: int = Field(default=1000, ge=0, description="Problem size for the bundled workloads")
    min_duration_s: float = Field(default=0.1, gt=0.0, le=60.0, description="Stability threshold per timed batch")
    min_iterations: int = Field(default=1, ge=1)
    max_iterations: int = Field(default=2 ** 20, ge=1, le=2 ** 40)
    trials: int = Field(default=10, ge=1, le=1000)
    warmup_batches: int = Field(default=1, ge=0, le=100)
    confidence: float = Field(default=0.999, gt=0.0, lt=1.0)
    unit: Literal["s/op", "ms/op", "us/op", "ns/op"] = "ms/op"
    precision: int = Field(default=6, ge=0, le=12)
    with_head: bool = True
    reverse_order: bool = False

    def to_run_config(self) -> RunConfig:
        """Convert to the runner's RunConfig; raises ValueError when max < min iterations."""
        return RunConfig(
            min_duration_s=self.min_duration_s,
            min_iterations=self.min_iterations,
            max_iterations=self.max_iterations,
            trials=self.trials,
            warmup_batches=self.warmup_batches,
            confidence=self.confidence,
            unit=self.unit,
            precision=self.precision,
            with_head=self.with_head,
            reverse_order=self.reverse_order,
        )


class RunManifest(BaseModel):
    """Manifest for a single run: config hash, run_id, per-case summary, paths."""

    run_id: str
    config_hash: str
    created_at: str = ""
    config: dict = Field(default_factory=dict)
    cases: list[str] = Field(default_factory=list)
    summary: dict = Field(default_factory=dict, description="case name -> {mean, error, unit, count, low_confidence}")
    extra: dict = Field(default_factory=dict)
    artifacts: dict = Field(default_factory=dict, description="Paths: manifest, results_json, results_csv, run_log")


def stable_config_hash(config: Any) -> str:
    """Stable hash from config (sorted keys). Same config => same hash."""
    if hasattr(config, "model_dump"):
        d = config.model_dump()
    elif hasattr(config, "to_dict"):
        d = config.to_dict()
    elif hasattr(config, "__dict__"):
        d = {k: v for k, v in config.__dict__.items() if not k.startswith("_")}
    else:
        d = dict(config) if hasattr(config, "items") else {}

    def norm(o):
        if isinstance(o, dict):
            return {str(k): norm(v) for k, v in sorted(o.items())}
        if isinstance(o, (list, tuple)):
            return [norm(x) for x in o]
        return o
    payload = json.dumps(norm(d), sort_keys=True, default=str)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]
