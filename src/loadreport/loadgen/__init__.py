from __future__ import annotations

from loadreport.loadgen.channel import ChannelClosedError, OutcomeChannel, drain_nowait

__all__ = ["ChannelClosedError", "OutcomeChannel", "drain_nowait"]
