"""Schemas for benchmark cases, run config and result records."""

from dataclasses import dataclass, field, asdict
from typing import Any, Callable

UNITS = ("s/op", "ms/op", "us/op", "ns/op")


@dataclass(frozen=True)
class BenchmarkCase:
    name: str
    operation: Callable[[], Any]


@dataclass(frozen=True)
class RunConfig:
    min_duration_s: float = 0.1  # stability threshold for one timed batch
    min_iterations: int = 1
    max_iterations: int = 2 ** 20
    trials: int = 10
    warmup_batches: int = 1
    confidence: float = 0.999
    unit: str = "ms/op"
    precision: int = 6
    with_head: bool = True
    reverse_order: bool = False

    def __post_init__(self):
        if self.min_duration_s <= 0:
            raise ValueError("min_duration_s must be positive")
        if self.min_iterations < 1:
            raise ValueError("min_iterations must be >= 1")
        if self.max_iterations < self.min_iterations:
            raise ValueError("max_iterations must be >= min_iterations")
        if self.trials < 1:
            raise ValueError("trials must be >= 1")
        if self.warmup_batches < 0:
            raise ValueError("warmup_batches must be >= 0")
        if not 0.0 < self.confidence < 1.0:
            raise ValueError("confidence must be in (0, 1)")
        if self.unit not in UNITS:
            raise ValueError(f"unit must be one of {UNITS}, got {self.unit!r}")
        if self.precision < 0:
            raise ValueError("precision must be >= 0")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ResultRecord:
    """Statistical summary of one case. Durations are per operation, in `unit`."""
    name: str
    mean: float
    error: float
    sdev: float
    unit: str
    iterations: int
    trials: int = 1
    calibration_rounds: int = 0
    low_confidence: bool = False
    samples: tuple[float, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["samples"] = list(self.samples)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultRecord":
        return cls(
            name=data["name"],
            mean=float(data["mean"]),
            error=float(data["error"]),
            sdev=float(data["sdev"]),
            unit=data["unit"],
            iterations=int(data["iterations"]),
            trials=int(data.get("trials", 1)),
            calibration_rounds=int(data.get("calibration_rounds", 0)),
            low_confidence=bool(data.get("low_confidence", False)),
            samples=tuple(float(x) for x in data.get("samples", [])),
        )
