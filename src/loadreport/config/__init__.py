from __future__ import annotations

from loadreport.config.models import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_PERCENTILES,
    OutputFormat,
    ReportConfig,
)

__all__ = [
    "DEFAULT_BUCKET_COUNT",
    "DEFAULT_PERCENTILES",
    "OutputFormat",
    "ReportConfig",
]
