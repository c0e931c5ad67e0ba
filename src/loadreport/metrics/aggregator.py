from __future__ import annotations

import asyncio
import json
import logging
import math
import queue
from collections import defaultdict
from datetime import timedelta
from typing import Iterable, Iterator, Union

import numpy as np

from loadreport.config import OutputFormat, ReportConfig
from loadreport.loadgen.channel import OutcomeChannel, drain_nowait
from loadreport.metrics.models import ErrorCount, OutcomeRecord, Report
from loadreport.metrics.stats import compute_histogram, compute_percentiles, status_code_distribution

logger = logging.getLogger(__name__)

OutcomeSource = Union[
    OutcomeChannel,
    "queue.Queue[OutcomeRecord]",
    "asyncio.Queue[OutcomeRecord]",
    Iterable[OutcomeRecord],
]


def _to_seconds(total: float | timedelta) -> float:
    if isinstance(total, timedelta):
        return total.total_seconds()
    return float(total)


def _to_milliseconds(total: float | timedelta) -> int:
    if isinstance(total, timedelta):
        return total // timedelta(milliseconds=1)
    seconds = float(total)
    if not math.isfinite(seconds):
        return 0
    return int(round(seconds * 1000))


class ReportAggregator:
    """Reduces the outcome records of one run into a :class:`Report`.

    ``results`` may be an :class:`OutcomeChannel` (read until closed), a
    ``queue.Queue`` or ``asyncio.Queue`` (polled once without blocking) or
    any finite iterable of records. Producers must be finished, or the
    channel closed by them, before :meth:`finalize` can see every record.
    """

    def __init__(
        self,
        total: float | timedelta,
        results: OutcomeSource,
        output: OutputFormat | str | None = None,
        config: ReportConfig | None = None,
    ) -> None:
        self.total_seconds = _to_seconds(total)
        self.total_ms = _to_milliseconds(total)
        self.output = OutputFormat.coerce(output)
        self.config = config or ReportConfig()
        self._results = results
        self._report: Report | None = None
        self._finalized = False

    def finalize(self) -> Report:
        if self._finalized:
            logger.warning(json.dumps({"event": "finalize_repeated"}))
        self._finalized = True
        if self._report is None:
            self._report = self._build()
        return self._report

    def error_distribution(self) -> list[ErrorCount]:
        if self._report is None:
            self._report = self._build()
        return self._report.error_distribution()

    def _drain(self) -> Iterator[OutcomeRecord]:
        source = self._results
        if isinstance(source, OutcomeChannel):
            return iter(source)
        if isinstance(source, (queue.Queue, asyncio.Queue)):
            return drain_nowait(source)
        return iter(source)

    def _build(self) -> Report:
        lats: list[float] = []
        avg_total = 0.0
        size_total = 0
        status_code_dist: dict[int, int] = defaultdict(int)
        error_dist: dict[str, int] = defaultdict(int)

        for record in self._drain():
            if record.error is not None:
                error_dist[record.error] += 1
                continue
            lats.append(record.duration_seconds * 1000)
            avg_total += record.duration_seconds
            status_code_dist[record.status_code] += 1
            if record.content_length > 0:
                size_total += record.content_length

        total_duration_ms = self.total_ms
        logger.info(
            json.dumps(
                {
                    "event": "report_finalized",
                    "successes": len(lats),
                    "errors": sum(error_dist.values()),
                    "total_duration_ms": total_duration_ms,
                }
            )
        )

        if not lats:
            return Report(
                total_duration_ms=total_duration_ms,
                error_counts=error_dist,
                output=self.output,
            )

        sorted_lats = np.sort(np.asarray(lats, dtype=float))
        latencies_ms = tuple(float(v) for v in sorted_lats)
        success_count = len(latencies_ms)
        if self.total_seconds > 0:
            rps = success_count / self.total_seconds
        else:
            rps = math.nan

        return Report(
            total_duration_ms=total_duration_ms,
            fastest_ms=latencies_ms[0],
            slowest_ms=latencies_ms[-1],
            average_ms=avg_total / success_count * 1000,
            requests_per_second=rps,
            avg_total_seconds=avg_total,
            latencies_ms=latencies_ms,
            size_total_bytes=size_total,
            status_code_counts=status_code_dist,
            error_counts=error_dist,
            status_codes=tuple(status_code_distribution(status_code_dist)),
            percentiles=tuple(
                compute_percentiles(
                    latencies_ms,
                    self.config.percentiles,
                    omit_zero=self.config.omit_zero_percentiles,
                )
            ),
            histogram=tuple(compute_histogram(latencies_ms, self.config.bucket_count)),
            output=self.output,
        )
