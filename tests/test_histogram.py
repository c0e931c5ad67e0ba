from __future__ import annotations

import math
import warnings

from hypothesis import given, strategies as st

from loadreport.metrics import compute_histogram


def test_even_spread() -> None:
    lats = [float(v) for v in range(1, 11)]
    buckets = compute_histogram(lats)
    assert len(buckets) == 11
    assert buckets[0].upper_bound_ms == 1.0
    assert buckets[-1].upper_bound_ms == 10.0
    assert sum(b.count for b in buckets) == 10
    assert buckets[0].count == 1
    assert buckets[-1].count == 1


def test_values_count_against_first_bound_at_or_above() -> None:
    buckets = compute_histogram([0.0, 5.0, 5.0, 10.0])
    counts = {b.upper_bound_ms: b.count for b in buckets}
    assert counts[0.0] == 1
    assert counts[5.0] == 2
    assert counts[10.0] == 1


def test_identical_latencies_collapse_into_first_bucket() -> None:
    buckets = compute_histogram([5.0] * 7)
    assert len(buckets) == 11
    assert all(b.upper_bound_ms == 5.0 for b in buckets)
    assert buckets[0].count == 7
    assert sum(b.count for b in buckets[1:]) == 0


def test_single_latency() -> None:
    buckets = compute_histogram([42.0])
    assert buckets[0].count == 1


def test_custom_bucket_count() -> None:
    buckets = compute_histogram([1.0, 2.0, 3.0, 4.0], bucket_count=3)
    assert [b.upper_bound_ms for b in buckets] == [1.0, 2.0, 3.0, 4.0]
    assert [b.count for b in buckets] == [1, 1, 1, 1]


def test_empty_input() -> None:
    assert compute_histogram([]) == []


@given(st.lists(st.floats(min_value=0.0, max_value=1e6), min_size=1, max_size=500))
def test_counts_sum_to_sample_size(values: list[float]) -> None:
    lats = sorted(values)
    buckets = compute_histogram(lats)
    assert sum(b.count for b in buckets) == len(lats)
    assert buckets[-1].upper_bound_ms == lats[-1]
    assert buckets == compute_histogram(lats)


def test_infinite_latency_keeps_boundaries_finite_below_slowest() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        buckets = compute_histogram([1.0, 2.0, math.inf])
    assert all(not math.isnan(b.upper_bound_ms) for b in buckets)
    assert [b.upper_bound_ms for b in buckets[:-1]] == [1.0] * 10
    assert buckets[-1].upper_bound_ms == math.inf
    assert buckets[0].count == 1
    assert buckets[-1].count == 2
    assert sum(b.count for b in buckets) == 3
