from __future__ import annotations

import math
from typing import Mapping, Sequence

import numpy as np

from loadreport.config import DEFAULT_BUCKET_COUNT, DEFAULT_PERCENTILES
from loadreport.metrics.models import Bucket, Percentile, StatusCodeCount


def compute_percentiles(
    latencies_ms: Sequence[float],
    targets: Sequence[int] = DEFAULT_PERCENTILES,
    omit_zero: bool = True,
) -> list[Percentile]:
    """Pick, for each target, the first latency whose rank reaches it.

    ``latencies_ms`` must be sorted ascending. The rank of index ``i`` is
    ``i * 100 // n`` and at most one target is satisfied per index, so short
    inputs can leave the upper targets without a value; those are left out.
    With ``omit_zero`` set, values that are not greater than zero are left out
    as well.
    """
    n = len(latencies_ms)
    found: list[float | None] = [None] * len(targets)
    j = 0
    for i in range(n):
        if j >= len(targets):
            break
        rank = i * 100 // n
        if rank >= targets[j]:
            found[j] = float(latencies_ms[i])
            j += 1

    percentiles: list[Percentile] = []
    for pct, value in zip(targets, found):
        if value is None:
            continue
        if omit_zero and not value > 0:
            continue
        percentiles.append(Percentile(percent=pct, latency_ms=value))
    return percentiles


def compute_histogram(latencies_ms: Sequence[float], bucket_count: int = DEFAULT_BUCKET_COUNT) -> list[Bucket]:
    """Split ``[fastest, slowest]`` into equal-width buckets.

    There are ``bucket_count + 1`` boundaries, the last one pinned to the
    slowest latency. Each latency is counted against the first boundary that
    is greater than or equal to it. When every latency is identical all
    boundaries collapse and the whole count lands in the first bucket. A
    non-finite spread (an infinite latency) is treated the same way, except
    that the last boundary still holds the slowest value.
    """
    lats = np.asarray(latencies_ms, dtype=float)
    if lats.size == 0:
        return []
    fastest = float(lats.min())
    slowest = float(lats.max())
    width = (slowest - fastest) / bucket_count
    if not math.isfinite(width):
        width = 0.0
    bounds = fastest + width * np.arange(bucket_count + 1, dtype=float)
    bounds[-1] = slowest
    idx = np.minimum(np.searchsorted(bounds, lats, side="left"), bucket_count)
    counts = np.bincount(idx, minlength=bucket_count + 1)
    return [Bucket(upper_bound_ms=float(b), count=int(c)) for b, c in zip(bounds, counts)]


def status_code_distribution(counts: Mapping[int, int]) -> list[StatusCodeCount]:
    return [StatusCodeCount(code=code, count=num) for code, num in sorted(counts.items())]
