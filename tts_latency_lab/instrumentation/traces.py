"""
Tracing utilities for TTS latency benchmarking.

Provides optional OpenTelemetry spans around each synthesis call. When the
OpenTelemetry SDK is not installed, spans are None and tracing is a no-op.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

# OpenTelemetry imports - optional dependency
try:
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.trace import Status, StatusCode
    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False


class TracingConfig:
    """Configuration for tracing setup."""

    def __init__(
        self,
        service_name: str = "tts-latency-lab",
        enable_console_export: bool = True,
    ):
        self.service_name = service_name
        self.enable_console_export = enable_console_export


class Tracer:
    """OpenTelemetry tracer with a no-op fallback."""

    def __init__(self, config: Optional[TracingConfig] = None):
        self.config = config or TracingConfig()
        self._provider = None
        self._otel_tracer = None
        self._initialized = False

    @property
    def enabled(self) -> bool:
        return self._otel_tracer is not None

    def initialize(self) -> "Tracer":
        """Initialize the tracing backend."""
        if self._initialized:
            return self

        if OTEL_AVAILABLE:
            resource = Resource.create({"service.name": self.config.service_name})
            self._provider = TracerProvider(resource=resource)
            if self.config.enable_console_export:
                self._provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
            self._otel_tracer = self._provider.get_tracer(self.config.service_name)

        self._initialized = True
        return self

    def shutdown(self) -> None:
        """Flush and shut down the tracing backend."""
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
        self._otel_tracer = None
        self._initialized = False

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ) -> Iterator[Any]:
        """Create a traced span.

        Usage:
            with tracer.span("synthesize", {"tts.format": "riff-16khz-16bit-mono-pcm"}) as span:
                ...
                if span:
                    span.set_attribute("tts.bytes_read", 1024)
        """
        if not self._initialized:
            self.initialize()

        span_obj = None
        if self._otel_tracer:
            span_obj = self._otel_tracer.start_span(name)
            for key, value in (attributes or {}).items():
                span_obj.set_attribute(key, value)

        try:
            yield span_obj
        except Exception as e:
            if span_obj is not None:
                span_obj.set_status(Status(StatusCode.ERROR, str(e)))
                span_obj.record_exception(e)
            raise
        finally:
            if span_obj is not None:
                span_obj.end()


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer(config: Optional[TracingConfig] = None) -> Tracer:
    """Get or create the global tracer instance."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(config)
    return _global_tracer


def init_tracing(config: Optional[TracingConfig] = None) -> Tracer:
    """Initialize global tracing."""
    return get_tracer(config).initialize()


def shutdown_tracing() -> None:
    """Shutdown global tracing."""
    global _global_tracer
    if _global_tracer:
        _global_tracer.shutdown()
        _global_tracer = None
