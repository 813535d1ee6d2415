"""
Instrumentation module for TTS latency benchmarking.

Provides timing utilities, stream consumption and tracing integration.
"""

from .timing import (
    Timer,
    TimingSample,
    SampleRecorder,
    FormatSeries,
)

from .stream import (
    ConsumedAudio,
    consume_stream,
)

from .traces import (
    Tracer,
    TracingConfig,
    get_tracer,
    init_tracing,
    shutdown_tracing,
    OTEL_AVAILABLE,
)

__all__ = [
    # Timing
    "Timer",
    "TimingSample",
    "SampleRecorder",
    "FormatSeries",
    # Streams
    "ConsumedAudio",
    "consume_stream",
    # Tracing
    "Tracer",
    "TracingConfig",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
    "OTEL_AVAILABLE",
]
