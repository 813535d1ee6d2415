"""
Sweep orchestrator for TTS latency experiments.

Runs one synthesis call per (output format, sentence) pair, strictly in
sequence, and aggregates first/last byte latency per format group.
"""

import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from ..exceptions import SynthesisError
from ..instrumentation.stream import consume_stream
from ..instrumentation.timing import FormatSeries, Timer, TimingSample
from ..instrumentation.traces import Tracer
from ..scenarios.corpus import WARMUP_TEXT
from ..synthesis.base import (
    DEFAULT_LOCALE,
    DEFAULT_REQUEST_URI,
    DEFAULT_VOICE_GENDER,
    DEFAULT_VOICE_NAME,
    SynthesisRequest,
    Synthesizer,
)
from ..synthesis.formats import DURATION_REFERENCE_FORMAT, OutputFormat
from .reporter import ConsoleReporter, Report, aggregate


class CallState(Enum):
    """Lifecycle of a single synthesis call."""

    IDLE = "idle"
    TIMER_STARTED = "timer_started"
    AWAITING_RESPONSE = "awaiting_response"
    STREAMING_RESPONSE = "streaming_response"
    SAMPLE_RECORDED = "sample_recorded"
    FAILED = "failed"


@dataclass
class SweepConfig:
    """Configuration for a format sweep."""

    name: str = "format_sweep"
    locale: str = DEFAULT_LOCALE
    voice_name: str = DEFAULT_VOICE_NAME
    voice_gender: str = DEFAULT_VOICE_GENDER
    request_uri: str = DEFAULT_REQUEST_URI
    warmup_text: Optional[str] = WARMUP_TEXT
    duration_format: OutputFormat = DURATION_REFERENCE_FORMAT
    verbose: bool = True

    def build_request(self, text: str, output_format: OutputFormat, token: str) -> SynthesisRequest:
        """Fresh request for one call."""
        return SynthesisRequest(
            text=text,
            output_format=output_format,
            authorization_token=token,
            locale=self.locale,
            voice_name=self.voice_name,
            voice_gender=self.voice_gender,
            request_uri=self.request_uri,
        )


@dataclass
class SweepContext:
    """Mutable state of one sweep run, owned by the driver's loop."""

    timer: Timer
    series: FormatSeries = field(default_factory=FormatSeries)
    report: Report = field(default_factory=Report)
    duration_estimates_ms: list[float] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    state: CallState = CallState.IDLE
    calls_completed: int = 0
    calls_failed: int = 0
    group_failures: int = 0


@dataclass
class SweepOutcome:
    """Results from a completed sweep."""

    config: SweepConfig
    report: Report
    duration_estimates_ms: list[float]
    calls_completed: int
    calls_failed: int
    errors: list[str] = field(default_factory=list)

    @property
    def mean_duration_ms(self) -> Optional[float]:
        """Mean estimated audio duration over the duration reference format."""
        if not self.duration_estimates_ms:
            return None
        return sum(self.duration_estimates_ms) / len(self.duration_estimates_ms)


ErrorHandler = Callable[[SynthesisError], None]


class SweepDriver:
    """Runs the format x sentence sweep against a synthesizer."""

    def __init__(
        self,
        synthesizer: Synthesizer,
        config: Optional[SweepConfig] = None,
        reporter: Optional[ConsoleReporter] = None,
        error_handler: Optional[ErrorHandler] = None,
        tracer: Optional[Tracer] = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ):
        self.synthesizer = synthesizer
        self.config = config or SweepConfig()
        self.reporter = reporter or ConsoleReporter()
        self.error_handler = error_handler or self._print_error
        self.tracer = tracer
        self._clock = clock

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message)

    def _print_error(self, error: SynthesisError) -> None:
        self._log(self.reporter.call_failed(error))

    async def run(
        self,
        formats: Sequence[OutputFormat],
        sentences: Sequence[str],
        token: str,
    ) -> SweepOutcome:
        """Run the sweep.

        Args:
            formats: Output formats in sweep order.
            sentences: Input texts, spoken once per format.
            token: Bearer access token for the synthesis service.
        """
        formats = list(formats)
        sentences = list(sentences)
        if not formats:
            raise ValueError("At least one output format is required")
        if not sentences:
            raise ValueError("At least one sentence is required")

        ctx = SweepContext(timer=Timer(self.config.name, clock=self._clock))

        if self.config.warmup_text:
            await self._warm_up(ctx, formats[0], token)

        for output_format in formats:
            self._log(self.reporter.format_started(output_format.value))
            for count, text in enumerate(sentences, start=1):
                self._log(self.reporter.call_started(count))
                sample = await self._run_call(ctx, output_format, count, text, token)
                if sample is not None:
                    self._record(ctx, output_format, sample)
            self._close_group(ctx, output_format)

        outcome = SweepOutcome(
            config=self.config,
            report=ctx.report,
            duration_estimates_ms=list(ctx.duration_estimates_ms),
            calls_completed=ctx.calls_completed,
            calls_failed=ctx.calls_failed,
            errors=list(ctx.errors),
        )
        self._log(self.reporter.final_report(outcome.report, outcome.mean_duration_ms))
        return outcome

    async def _warm_up(self, ctx: SweepContext, output_format: OutputFormat, token: str) -> None:
        """One untimed call so connection setup does not land in the first sample."""
        request = self.config.build_request(self.config.warmup_text, output_format, token)
        ctx.timer.restart()
        try:
            result = await self.synthesizer.speak(request)
            if not result.ok:
                raise result.error
            await consume_stream(result.stream, ctx.timer)
        except SynthesisError as e:
            self.error_handler(e)

    async def _run_call(
        self,
        ctx: SweepContext,
        output_format: OutputFormat,
        count: int,
        text: str,
        token: str,
    ) -> Optional[TimingSample]:
        """Issue one call and drain its stream; None if the call failed."""
        request = self.config.build_request(text, output_format, token)
        attributes = {"tts.format": output_format.value, "tts.sentence_index": count}
        span_cm = self.tracer.span("synthesize", attributes) if self.tracer else nullcontext()

        with span_cm as span:
            ctx.state = CallState.TIMER_STARTED
            ctx.timer.restart()
            try:
                ctx.state = CallState.AWAITING_RESPONSE
                result = await self.synthesizer.speak(request)
                if not result.ok:
                    raise result.error
                ctx.state = CallState.STREAMING_RESPONSE
                consumed = await consume_stream(result.stream, ctx.timer)
            except SynthesisError as e:
                ctx.state = CallState.FAILED
                self._fail(ctx, e)
                if span is not None:
                    span.set_attribute("tts.error", str(e))
                return None

            if span is not None:
                for key, value in consumed.sample.to_dict().items():
                    span.set_attribute(f"tts.{key}", value)
            return consumed.sample

    def _record(self, ctx: SweepContext, output_format: OutputFormat, sample: TimingSample) -> None:
        ctx.series.append(sample)
        ctx.state = CallState.SAMPLE_RECORDED
        ctx.calls_completed += 1
        bytes_per_ms = output_format.bytes_per_millisecond
        if output_format is self.config.duration_format and bytes_per_ms:
            ctx.duration_estimates_ms.append(sample.bytes_read / bytes_per_ms)
        self._log(self.reporter.call_completed(sample))

    def _fail(self, ctx: SweepContext, error: SynthesisError) -> None:
        ctx.calls_failed += 1
        ctx.group_failures += 1
        ctx.errors.append(str(error))
        self.error_handler(error)

    def _close_group(self, ctx: SweepContext, output_format: OutputFormat) -> None:
        """Aggregate the finished group into the report and reset its series."""
        row = aggregate(output_format.value, ctx.series, ctx.group_failures)
        ctx.report.append(row)
        self._log(self.reporter.format_summary(row))
        ctx.series.clear()
        ctx.group_failures = 0
