from __future__ import annotations

from loadreport.config import OutputFormat, ReportConfig
from loadreport.loadgen import ChannelClosedError, OutcomeChannel
from loadreport.metrics import (
    Bucket,
    ErrorCount,
    OutcomeRecord,
    Percentile,
    Report,
    ReportAggregator,
    StatusCodeCount,
)

__all__ = [
    "Bucket",
    "ChannelClosedError",
    "ErrorCount",
    "OutcomeChannel",
    "OutcomeRecord",
    "OutputFormat",
    "Percentile",
    "Report",
    "ReportAggregator",
    "ReportConfig",
    "StatusCodeCount",
]
