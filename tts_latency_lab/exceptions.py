"""
Exception hierarchy for TTS latency benchmarking.

    TTSLatencyLabError
    ├── AuthenticationError   - fatal, aborts the run before any sweep traffic
    ├── SynthesisError        - per-call, the call is skipped
    │   ├── TransportError
    │   └── StreamReadError
    └── EmptySeriesError      - mean() over a series with no samples
"""

from typing import Optional


class TTSLatencyLabError(Exception):
    """Base exception for all latency lab errors."""

    def __init__(self, message: str, *args: object):
        self.message = message
        super().__init__(message, *args)


class AuthenticationError(TTSLatencyLabError):
    """Access token could not be obtained (invalid key or network failure)."""


class SynthesisError(TTSLatencyLabError):
    """A single synthesis call failed.

    Attributes:
        output_format: Wire name of the format being requested, if known.
    """

    def __init__(self, message: str, output_format: Optional[str] = None):
        self.output_format = output_format
        super().__init__(message)


class TransportError(SynthesisError):
    """The request could not be sent or the service rejected it."""

    def __init__(
        self,
        message: str,
        output_format: Optional[str] = None,
        status: Optional[int] = None,
    ):
        self.status = status
        super().__init__(message, output_format)


class StreamReadError(SynthesisError):
    """The response stream failed while it was being drained."""


class EmptySeriesError(TTSLatencyLabError):
    """Mean requested over a series with no samples."""
