"""Benchmark workloads for the diff engine and slowdown gate utilities.

The LCS table is quadratic in input size, so these workloads exist to make
that cost visible and to catch regressions against a stored baseline.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import random
import string
import time
from typing import Any, Callable, Literal

from diffpack.diff.engine import compute_inline_changes, compute_line_diff, compute_stats

BenchmarkGateStatus = Literal[
    "not_requested",
    "within_threshold",
    "threshold_exceeded",
    "missing_baseline",
]

DEFAULT_BENCHMARK_SEED = 20260222


@dataclass(slots=True, frozen=True)
class BenchmarkWorkloadStats:
    """Summary metrics for a single benchmark workload."""

    name: str
    iterations: int
    min_ms: float
    max_ms: float
    mean_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "iterations": self.iterations,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "mean_ms": self.mean_ms,
        }


@dataclass(slots=True, frozen=True)
class BenchmarkSuiteResult:
    """Combined benchmark suite result across diff workloads."""

    line_count: int
    line_length: int
    iterations: int
    seed: int
    workloads: dict[str, BenchmarkWorkloadStats]
    total_mean_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_count": self.line_count,
            "line_length": self.line_length,
            "iterations": self.iterations,
            "seed": self.seed,
            "total_mean_ms": self.total_mean_ms,
            "workloads": {
                name: stats.to_dict()
                for name, stats in sorted(self.workloads.items())
            },
        }


@dataclass(slots=True, frozen=True)
class BenchmarkGateResult:
    """Result of slowdown gate evaluation for a benchmark suite."""

    status: BenchmarkGateStatus
    threshold_percent: float | None
    gate_failed: bool
    failing_workloads: list[str]
    workload_slowdown_percent: dict[str, float]
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "threshold_percent": self.threshold_percent,
            "gate_failed": self.gate_failed,
            "failing_workloads": list(self.failing_workloads),
            "workload_slowdown_percent": dict(sorted(self.workload_slowdown_percent.items())),
            "message": self.message,
        }


def build_benchmark_texts(
    *,
    line_count: int,
    line_length: int,
    seed: int = DEFAULT_BENCHMARK_SEED,
) -> tuple[str, str]:
    """Build a deterministic old/new text pair with scattered edits.

    Roughly one line in eight is rewritten in place, one in twenty deleted
    and one in twenty followed by a new line.
    """
    if line_count < 1:
        raise ValueError("line_count must be >= 1")
    if line_length < 1:
        raise ValueError("line_length must be >= 1")

    rng = random.Random(seed)
    alphabet = string.ascii_lowercase + "     "
    old_lines = [_random_line(rng, alphabet, line_length) for _ in range(line_count)]

    new_lines: list[str] = []
    for line in old_lines:
        roll = rng.random()
        if roll < 0.05:
            continue
        if roll < 0.175:
            new_lines.append(_mutate_line(rng, line, alphabet))
        else:
            new_lines.append(line)
        if rng.random() < 0.05:
            new_lines.append(_random_line(rng, alphabet, line_length))

    return "\n".join(old_lines), "\n".join(new_lines)


def run_benchmark_suite(
    *,
    line_count: int = 200,
    line_length: int = 60,
    iterations: int = 5,
    seed: int = DEFAULT_BENCHMARK_SEED,
) -> BenchmarkSuiteResult:
    """Time line diff, inline diff and stats workloads on synthetic text."""
    if iterations < 1:
        raise ValueError("iterations must be >= 1")

    old_text, new_text = build_benchmark_texts(
        line_count=line_count,
        line_length=line_length,
        seed=seed,
    )
    lines = compute_line_diff(old_text, new_text)
    old_line = old_text.split("\n", 1)[0]
    new_line = _mutate_line(random.Random(seed), old_line, string.ascii_lowercase)

    workloads = {
        "line_diff": _measure_workload(
            "line_diff",
            iterations,
            lambda _i: compute_line_diff(old_text, new_text),
        ),
        "inline_diff": _measure_workload(
            "inline_diff",
            iterations,
            lambda _i: compute_inline_changes(old_line, new_line),
        ),
        "stats": _measure_workload(
            "stats",
            iterations,
            lambda _i: compute_stats(lines),
        ),
    }

    total_mean_ms = round(sum(workload.mean_ms for workload in workloads.values()), 6)
    return BenchmarkSuiteResult(
        line_count=line_count,
        line_length=line_length,
        iterations=iterations,
        seed=seed,
        workloads=workloads,
        total_mean_ms=total_mean_ms,
    )


def evaluate_benchmark_slowdown_gate(
    current: BenchmarkSuiteResult,
    baseline_payload: dict[str, Any] | None,
    *,
    threshold_percent: float | None,
) -> BenchmarkGateResult:
    """Evaluate benchmark slowdown against a baseline benchmark payload."""
    if threshold_percent is None:
        return BenchmarkGateResult(
            status="not_requested",
            threshold_percent=None,
            gate_failed=False,
            failing_workloads=[],
            workload_slowdown_percent={},
            message="benchmark slowdown gate not requested",
        )

    baseline_workloads = _extract_baseline_workloads(baseline_payload or {})
    if not baseline_workloads:
        return BenchmarkGateResult(
            status="missing_baseline",
            threshold_percent=threshold_percent,
            gate_failed=True,
            failing_workloads=[],
            workload_slowdown_percent={},
            message=(
                "benchmark slowdown gate requested but baseline benchmark is missing"
                if baseline_payload is None
                else "baseline benchmark payload does not include workloads"
            ),
        )

    slowdowns: dict[str, float] = {}
    failures: list[str] = []

    for name, current_stats in current.workloads.items():
        baseline_entry = baseline_workloads.get(name)
        baseline_mean = (
            _to_float(baseline_entry.get("mean_ms")) if isinstance(baseline_entry, dict) else None
        )
        if baseline_mean is None or baseline_mean <= 0:
            failures.append(name)
            continue
        slowdown_percent = round(
            (current_stats.mean_ms - baseline_mean) / baseline_mean * 100.0,
            6,
        )
        slowdowns[name] = slowdown_percent
        if slowdown_percent > threshold_percent:
            failures.append(name)

    if failures:
        return BenchmarkGateResult(
            status="threshold_exceeded",
            threshold_percent=threshold_percent,
            gate_failed=True,
            failing_workloads=sorted(set(failures)),
            workload_slowdown_percent=slowdowns,
            message="benchmark slowdown exceeded threshold for one or more workloads",
        )

    return BenchmarkGateResult(
        status="within_threshold",
        threshold_percent=threshold_percent,
        gate_failed=False,
        failing_workloads=[],
        workload_slowdown_percent=slowdowns,
        message="benchmark slowdown within threshold",
    )


def _random_line(rng: random.Random, alphabet: str, length: int) -> str:
    return "".join(rng.choice(alphabet) for _ in range(length))


def _mutate_line(rng: random.Random, line: str, alphabet: str) -> str:
    chars = list(line)
    for _ in range(max(1, len(chars) // 10)):
        position = rng.randrange(len(chars) + 1)
        if chars and position < len(chars) and rng.random() < 0.5:
            chars[position] = rng.choice(alphabet)
        else:
            chars.insert(position, rng.choice(alphabet))
    return "".join(chars)


def _measure_workload(
    name: str,
    iterations: int,
    fn: Callable[[int], Any],
) -> BenchmarkWorkloadStats:
    samples: list[float] = []
    for index in range(iterations):
        start = time.perf_counter()
        fn(index)
        end = time.perf_counter()
        samples.append((end - start) * 1000.0)

    return BenchmarkWorkloadStats(
        name=name,
        iterations=iterations,
        min_ms=round(min(samples), 6),
        max_ms=round(max(samples), 6),
        mean_ms=round(sum(samples) / len(samples), 6),
    )


def _extract_baseline_workloads(payload: dict[str, Any]) -> dict[str, Any]:
    if isinstance(payload.get("workloads"), dict):
        return payload["workloads"]
    benchmark = payload.get("benchmark")
    if isinstance(benchmark, dict) and isinstance(benchmark.get("workloads"), dict):
        return benchmark["workloads"]
    return {}


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(float(value)) else None
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None
