from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from loadreport.config import OutputFormat


@dataclass(frozen=True, slots=True)
class OutcomeRecord:
    """Result of one attempted request.

    ``duration_seconds``, ``status_code`` and ``content_length`` are only
    meaningful when ``error`` is None. A ``content_length`` of zero or less
    means the size is unknown.
    """

    duration_seconds: float = 0.0
    status_code: int = 0
    content_length: int = -1
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, duration_seconds: float, status_code: int, content_length: int = -1) -> OutcomeRecord:
        return cls(
            duration_seconds=duration_seconds,
            status_code=status_code,
            content_length=content_length,
        )

    @classmethod
    def failure(cls, error: str | BaseException) -> OutcomeRecord:
        return cls(error=str(error))


@dataclass(frozen=True, slots=True)
class Percentile:
    percent: int
    latency_ms: float


@dataclass(frozen=True, slots=True)
class Bucket:
    upper_bound_ms: float
    count: int


@dataclass(frozen=True, slots=True)
class StatusCodeCount:
    code: int
    count: int


@dataclass(frozen=True, slots=True)
class ErrorCount:
    error: str
    count: int


def _frozen(mapping: Mapping[Any, int] | None) -> Mapping[Any, int]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class Report:
    """Summary of a finished load test run.

    Latency fields are in milliseconds. ``average_ms`` and
    ``requests_per_second`` are NaN when no request succeeded.
    """

    total_duration_ms: int
    fastest_ms: float = 0.0
    slowest_ms: float = 0.0
    average_ms: float = math.nan
    requests_per_second: float = math.nan
    avg_total_seconds: float = 0.0
    latencies_ms: tuple[float, ...] = ()
    size_total_bytes: int = 0
    status_code_counts: Mapping[int, int] = field(default_factory=dict)
    error_counts: Mapping[str, int] = field(default_factory=dict)
    status_codes: tuple[StatusCodeCount, ...] = ()
    percentiles: tuple[Percentile, ...] = ()
    histogram: tuple[Bucket, ...] = ()
    output: OutputFormat = OutputFormat.SUMMARY

    def __post_init__(self) -> None:
        object.__setattr__(self, "status_code_counts", _frozen(self.status_code_counts))
        object.__setattr__(self, "error_counts", _frozen(self.error_counts))

    @property
    def success_count(self) -> int:
        return len(self.latencies_ms)

    @property
    def error_count(self) -> int:
        return sum(self.error_counts.values())

    @property
    def has_data(self) -> bool:
        return bool(self.latencies_ms)

    def error_distribution(self) -> list[ErrorCount]:
        """Error messages with their occurrence counts, most frequent first."""
        entries = [ErrorCount(error=error, count=count) for error, count in self.error_counts.items()]
        entries.sort(key=lambda e: (-e.count, e.error))
        return entries

    def to_dict(self) -> dict[str, Any]:
        return {
            "avg_total": self.avg_total_seconds,
            "fastest": self.fastest_ms,
            "slowest": self.slowest_ms,
            "average": _nan_to_none(self.average_ms),
            "rps": _nan_to_none(self.requests_per_second),
            "total_duration": self.total_duration_ms,
            "errors": [{"error": e.error, "count": e.count} for e in self.error_distribution()],
            "status_codes": [{"code": s.code, "count": s.count} for s in self.status_codes],
            "percentiles": [{"percent": p.percent, "count": p.latency_ms} for p in self.percentiles],
            "histogram": [{"bucket": b.upper_bound_ms, "count": b.count} for b in self.histogram],
            "lats": list(self.latencies_ms),
            "size_total": self.size_total_bytes,
            "output": self.output.value,
        }


def _nan_to_none(value: float) -> float | None:
    if math.isnan(value):
        return None
    return value
