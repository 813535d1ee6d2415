"""
Sweep harness for TTS latency experiments.

Provides orchestration and reporting capabilities.
"""

from .runner import (
    CallState,
    SweepConfig,
    SweepContext,
    SweepDriver,
    SweepOutcome,
)

from .reporter import (
    AggregateRow,
    ConsoleReporter,
    Report,
    aggregate,
    format_mean,
)

__all__ = [
    # Runner
    "CallState",
    "SweepConfig",
    "SweepContext",
    "SweepDriver",
    "SweepOutcome",
    # Reporter
    "AggregateRow",
    "ConsoleReporter",
    "Report",
    "aggregate",
    "format_mean",
]
