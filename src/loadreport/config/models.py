from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

DEFAULT_PERCENTILES: tuple[int, ...] = (10, 25, 50, 75, 90, 95, 99)
DEFAULT_BUCKET_COUNT = 10


class OutputFormat(str, Enum):
    SUMMARY = "summary"
    CSV = "csv"
    JSON = "json"

    @classmethod
    def coerce(cls, value: OutputFormat | str | None) -> OutputFormat:
        if value is None or value == "":
            return cls.SUMMARY
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            msg = f"Unsupported output format: {value!r}"
            raise ValueError(msg) from None


@dataclass(frozen=True, slots=True)
class ReportConfig:
    percentiles: tuple[int, ...] = DEFAULT_PERCENTILES
    bucket_count: int = DEFAULT_BUCKET_COUNT
    # Percentile values that are not > 0 are dropped from the report.
    omit_zero_percentiles: bool = True

    def __post_init__(self) -> None:
        if self.bucket_count < 1:
            msg = f"bucket_count must be >= 1, got {self.bucket_count}"
            raise ValueError(msg)
        previous = -1
        for pct in self.percentiles:
            if not 0 <= pct <= 100:
                msg = f"Percentile target out of range: {pct}"
                raise ValueError(msg)
            if pct <= previous:
                msg = f"Percentile targets must be strictly ascending: {self.percentiles}"
                raise ValueError(msg)
            previous = pct

    def to_metadata(self) -> Mapping[str, Any]:
        return {
            "percentiles": list(self.percentiles),
            "bucket_count": self.bucket_count,
            "omit_zero_percentiles": self.omit_zero_percentiles,
        }
