import json

import pytest

from diffpack.performance import (
    build_benchmark_texts,
    evaluate_benchmark_slowdown_gate,
    run_benchmark_suite,
)

_WORKLOADS = {"line_diff", "inline_diff", "stats"}


def test_benchmark_texts_are_deterministic_and_different() -> None:
    first = build_benchmark_texts(line_count=40, line_length=30, seed=7)
    second = build_benchmark_texts(line_count=40, line_length=30, seed=7)
    other_seed = build_benchmark_texts(line_count=40, line_length=30, seed=8)

    assert first == second
    assert first != other_seed
    old_text, new_text = first
    assert len(old_text.split("\n")) == 40
    assert all(len(line) == 30 for line in old_text.split("\n"))
    assert old_text != new_text


@pytest.mark.parametrize(
    "kwargs,match",
    [
        ({"line_count": 0, "line_length": 10}, "line_count must be >= 1"),
        ({"line_count": 10, "line_length": 0}, "line_length must be >= 1"),
    ],
)
def test_benchmark_texts_reject_empty_sizes(kwargs: dict, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        build_benchmark_texts(**kwargs)


def test_run_benchmark_suite_returns_representative_workloads() -> None:
    suite = run_benchmark_suite(line_count=20, line_length=20, iterations=1)

    assert set(suite.workloads.keys()) == _WORKLOADS
    assert suite.total_mean_ms >= 0.0
    assert all(stats.mean_ms >= 0.0 for stats in suite.workloads.values())
    assert all(stats.iterations == 1 for stats in suite.workloads.values())
    payload = suite.to_dict()
    assert payload["line_count"] == 20
    assert list(payload["workloads"]) == sorted(_WORKLOADS)


def test_run_benchmark_suite_rejects_zero_iterations() -> None:
    with pytest.raises(ValueError, match="iterations must be >= 1"):
        run_benchmark_suite(line_count=5, line_length=5, iterations=0)


def test_evaluate_benchmark_slowdown_gate() -> None:
    suite = run_benchmark_suite(line_count=20, line_length=20, iterations=1)

    tiny_baseline = {"workloads": {name: {"mean_ms": 0.0000001} for name in _WORKLOADS}}
    pass_baseline = {"workloads": {name: {"mean_ms": 999999.0} for name in _WORKLOADS}}

    failed = evaluate_benchmark_slowdown_gate(
        suite,
        tiny_baseline,
        threshold_percent=0.0,
    )
    passed = evaluate_benchmark_slowdown_gate(
        suite,
        pass_baseline,
        threshold_percent=0.0,
    )

    assert failed.gate_failed is True
    assert failed.status == "threshold_exceeded"
    assert failed.failing_workloads
    assert passed.gate_failed is False
    assert passed.status == "within_threshold"


def test_benchmark_gate_not_requested_and_missing_baseline() -> None:
    suite = run_benchmark_suite(line_count=5, line_length=5, iterations=1)

    not_requested = evaluate_benchmark_slowdown_gate(suite, None, threshold_percent=None)
    missing = evaluate_benchmark_slowdown_gate(suite, None, threshold_percent=10.0)
    empty = evaluate_benchmark_slowdown_gate(suite, {"other": 1}, threshold_percent=10.0)

    assert not_requested.status == "not_requested"
    assert not_requested.gate_failed is False
    assert missing.status == "missing_baseline"
    assert missing.gate_failed is True
    assert empty.status == "missing_baseline"
    assert "does not include workloads" in empty.message


def test_benchmark_gate_flags_workloads_without_baseline_mean() -> None:
    suite = run_benchmark_suite(line_count=5, line_length=5, iterations=1)
    baseline = {
        "workloads": {
            "line_diff": {"mean_ms": 999999.0},
            "inline_diff": {"mean_ms": "not-a-number"},
        }
    }

    result = evaluate_benchmark_slowdown_gate(suite, baseline, threshold_percent=50.0)

    assert result.status == "threshold_exceeded"
    assert result.failing_workloads == ["inline_diff", "stats"]


def test_benchmark_gate_supports_nested_payload_shape() -> None:
    suite = run_benchmark_suite(line_count=10, line_length=10, iterations=1)
    baseline = json.loads(json.dumps({"benchmark": suite.to_dict()}))

    result = evaluate_benchmark_slowdown_gate(
        suite,
        baseline,
        threshold_percent=100000.0,
    )

    assert result.status == "within_threshold"
