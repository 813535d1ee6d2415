"""
Timing utilities for TTS latency benchmarking.

Provides the stopwatch and per-metric sample series used to capture:
- First byte latency (request dispatch to first audio chunk)
- Last byte latency (request dispatch to full stream consumption)
- Payload size (bytes read per call)
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..exceptions import EmptySeriesError


@dataclass(frozen=True)
class TimingSample:
    """Timing marks for one completed synthesis call."""

    first_byte_ms: int
    last_byte_ms: int
    bytes_read: int

    def __post_init__(self):
        if self.first_byte_ms < 0 or self.bytes_read < 0:
            raise ValueError(f"Negative timing sample: {self}")
        if self.last_byte_ms < self.first_byte_ms:
            raise ValueError(
                f"Last byte ({self.last_byte_ms}ms) precedes first byte ({self.first_byte_ms}ms)"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "first_byte_ms": self.first_byte_ms,
            "last_byte_ms": self.last_byte_ms,
            "bytes_read": self.bytes_read,
        }


class Timer:
    """Restartable monotonic stopwatch reporting whole milliseconds.

    The clock returns integer nanoseconds.

    One timer is shared by a whole sweep; each call restarts it and the
    stream consumer reads it while the response is drained.
    """

    def __init__(self, name: str = "timer", clock: Callable[[], int] = time.perf_counter_ns):
        self.name = name
        self._clock = clock
        self.start_time: Optional[int] = None

    def restart(self) -> "Timer":
        """Reset the reference point to now."""
        self.start_time = self._clock()
        return self

    def elapsed_millis(self) -> int:
        """Whole milliseconds since the last restart."""
        if self.start_time is None:
            raise RuntimeError(f"Timer {self.name!r} read before restart()")
        return (self._clock() - self.start_time) // 1_000_000

    @property
    def running(self) -> bool:
        return self.start_time is not None


class SampleRecorder:
    """Ordered, appendable series of values for one metric."""

    def __init__(self, name: str):
        self.name = name
        self._values: list[float] = []

    def append(self, value: float) -> None:
        """Add a value to the end of the series."""
        self._values.append(value)

    def clear(self) -> None:
        """Empty the series in place."""
        self._values.clear()

    def mean(self) -> float:
        """Arithmetic mean of the current values."""
        if not self._values:
            raise EmptySeriesError(f"No samples recorded for {self.name}")
        return sum(self._values) / len(self._values)

    @property
    def values(self) -> list[float]:
        """Snapshot of the current values."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)


class FormatSeries:
    """First-byte, last-byte and bytes-read series for one format group.

    The three recorders are only appended to and cleared together, so
    they always have the same length.
    """

    def __init__(self):
        self.first_byte = SampleRecorder("first_byte_ms")
        self.last_byte = SampleRecorder("last_byte_ms")
        self.bytes_read = SampleRecorder("bytes_read")

    def append(self, sample: TimingSample) -> None:
        """Record all three fields of a sample."""
        self.first_byte.append(sample.first_byte_ms)
        self.last_byte.append(sample.last_byte_ms)
        self.bytes_read.append(sample.bytes_read)

    def clear(self) -> None:
        """Clear all three recorders for the next format group."""
        self.first_byte.clear()
        self.last_byte.clear()
        self.bytes_read.clear()

    def __len__(self) -> int:
        return len(self.first_byte)
