from __future__ import annotations

from loadreport.metrics.models import (
    Bucket,
    ErrorCount,
    OutcomeRecord,
    Percentile,
    Report,
    StatusCodeCount,
)
from loadreport.metrics.stats import compute_histogram, compute_percentiles, status_code_distribution
from loadreport.metrics.aggregator import OutcomeSource, ReportAggregator

__all__ = [
    "Bucket",
    "ErrorCount",
    "OutcomeRecord",
    "OutcomeSource",
    "Percentile",
    "Report",
    "ReportAggregator",
    "StatusCodeCount",
    "compute_histogram",
    "compute_percentiles",
    "status_code_distribution",
]
