"""
Interfaces for the external synthesis and authentication collaborators.

The sweep only depends on these types; concrete clients (see http_client)
are wired in by the benchmark suite or by tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Protocol, runtime_checkable

from ..exceptions import SynthesisError
from .formats import OutputFormat

DEFAULT_REQUEST_URI = "https://speech.platform.bing.com/synthesize"
DEFAULT_LOCALE = "en-US"
DEFAULT_VOICE_NAME = "Microsoft Server Speech Text to Speech Voice (en-US, ZiraRUS)"
DEFAULT_VOICE_GENDER = "Female"


@runtime_checkable
class AudioStream(Protocol):
    """Readable byte stream returned by a successful synthesis call."""

    def __aiter__(self) -> AsyncIterator[bytes]:
        ...

    async def aclose(self) -> None:
        ...


@dataclass(frozen=True)
class SynthesisRequest:
    """Parameters for one synthesis call."""

    text: str
    output_format: OutputFormat
    authorization_token: str
    locale: str = DEFAULT_LOCALE
    voice_name: str = DEFAULT_VOICE_NAME
    voice_gender: str = DEFAULT_VOICE_GENDER
    request_uri: str = DEFAULT_REQUEST_URI


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of one synthesis call: either an audio stream or an error."""

    stream: Optional[AudioStream] = None
    error: Optional[SynthesisError] = None

    def __post_init__(self):
        if (self.stream is None) == (self.error is None):
            raise ValueError("SynthesisResult needs exactly one of stream or error")

    @property
    def ok(self) -> bool:
        return self.stream is not None

    @classmethod
    def success(cls, stream: AudioStream) -> "SynthesisResult":
        return cls(stream=stream)

    @classmethod
    def failure(cls, error: SynthesisError) -> "SynthesisResult":
        return cls(error=error)


class Synthesizer(ABC):
    """Text-to-speech client that returns audio as a stream."""

    @abstractmethod
    async def speak(self, request: SynthesisRequest) -> SynthesisResult:
        """Issue one synthesis call.

        Failures to send or a rejected request are returned as
        SynthesisResult.failure, never raised. Errors while reading the
        returned stream surface from iterating the stream.
        """
        ...


class Authenticator(ABC):
    """Exchanges an API key for a bearer access token."""

    @abstractmethod
    async def get_access_token(self, api_key: str) -> str:
        """Return an access token.

        Raises:
            AuthenticationError: If the key is rejected or the endpoint is unreachable.
        """
        ...
