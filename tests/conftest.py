"""
Shared pytest fixtures for TTS latency lab tests.

Provides a controllable clock and a scripted synthesizer whose streams move
the clock to exact first/last byte marks, so timing assertions are exact.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator

import pytest

from tts_latency_lab.exceptions import SynthesisError
from tts_latency_lab.harness.runner import SweepConfig
from tts_latency_lab.synthesis.base import SynthesisRequest, SynthesisResult, Synthesizer

NS_PER_MS = 1_000_000


# ==============================================================================
# Clock
# ==============================================================================


class FakeClock:
    """Integer nanosecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_000) -> None:
        self.now_ns = start_ms * NS_PER_MS

    def __call__(self) -> int:
        return self.now_ns

    def advance_ms(self, ms: int) -> None:
        self.now_ns += ms * NS_PER_MS


# ==============================================================================
# Streams
# ==============================================================================


class FakeAudioStream:
    """Audio stream that sets the clock to scripted marks as it is read.

    Marks are relative to the clock value when the stream was created,
    which is right after the driver restarted its timer.
    """

    def __init__(
        self,
        clock: FakeClock,
        chunks: list[bytes],
        first_byte_ms: int = 10,
        last_byte_ms: int = 20,
        fail_at_chunk: int | None = None,
        hang: asyncio.Event | None = None,
    ) -> None:
        self.clock = clock
        self.chunks = chunks
        self.first_byte_ms = first_byte_ms
        self.last_byte_ms = last_byte_ms
        self.fail_at_chunk = fail_at_chunk
        self.hang = hang
        self.origin_ns = clock()
        self.close_count = 0

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self.hang is not None:
            await self.hang.wait()
        for index, chunk in enumerate(self.chunks):
            if index == self.fail_at_chunk:
                raise ConnectionResetError("connection reset by peer")
            if index == 0:
                self.clock.now_ns = self.origin_ns + self.first_byte_ms * NS_PER_MS
            yield chunk
        self.clock.now_ns = self.origin_ns + self.last_byte_ms * NS_PER_MS

    async def aclose(self) -> None:
        self.close_count += 1


# ==============================================================================
# Synthesizer
# ==============================================================================


@dataclass
class Step:
    """Scripted outcome of one synthesis call."""

    first_byte_ms: int = 10
    last_byte_ms: int = 20
    payload: bytes = b"\x01" * 64
    chunk_size: int = 16
    error: SynthesisError | None = None
    fail_at_chunk: int | None = None
    hang: asyncio.Event | None = None


class FakeSynthesizer(Synthesizer):
    """Synthesizer replaying scripted steps in call order."""

    def __init__(self, clock: FakeClock, steps: list[Step] | None = None, default: Step | None = None) -> None:
        self.clock = clock
        self.steps = list(steps or [])
        self.default = default or Step()
        self.requests: list[SynthesisRequest] = []
        self.streams: list[FakeAudioStream] = []
        self.overlapping_calls = 0

    async def speak(self, request: SynthesisRequest) -> SynthesisResult:
        if any(not stream.closed for stream in self.streams):
            self.overlapping_calls += 1
        self.requests.append(request)
        step = self.steps.pop(0) if self.steps else self.default
        if step.error is not None:
            return SynthesisResult.failure(step.error)

        chunks = [
            step.payload[i:i + step.chunk_size]
            for i in range(0, len(step.payload), step.chunk_size)
        ]
        stream = FakeAudioStream(
            self.clock,
            chunks,
            first_byte_ms=step.first_byte_ms,
            last_byte_ms=step.last_byte_ms,
            fail_at_chunk=step.fail_at_chunk,
            hang=step.hang,
        )
        self.streams.append(stream)
        return SynthesisResult.success(stream)


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Fresh fake clock."""
    return FakeClock()


@pytest.fixture
def quiet_config() -> SweepConfig:
    """Sweep config without console output or warm-up."""
    return SweepConfig(verbose=False, warmup_text=None)


@pytest.fixture
def make_synthesizer(clock: FakeClock):
    """Factory fixture for scripted synthesizers sharing the test clock."""

    def _create(steps: list[Step] | None = None, default: Step | None = None) -> FakeSynthesizer:
        return FakeSynthesizer(clock, steps, default)

    return _create
