"""
Synthesis service interfaces, output formats and HTTP clients.
"""

from .formats import OutputFormat, DURATION_REFERENCE_FORMAT

from .base import (
    AudioStream,
    Authenticator,
    SynthesisRequest,
    SynthesisResult,
    Synthesizer,
    DEFAULT_LOCALE,
    DEFAULT_REQUEST_URI,
    DEFAULT_VOICE_GENDER,
    DEFAULT_VOICE_NAME,
)

from .http_client import (
    HttpAudioStream,
    HttpAuthenticator,
    HttpSynthesizer,
    build_headers,
    build_ssml,
    DEFAULT_TOKEN_URI,
)

__all__ = [
    # Formats
    "OutputFormat",
    "DURATION_REFERENCE_FORMAT",
    # Interfaces
    "AudioStream",
    "Authenticator",
    "SynthesisRequest",
    "SynthesisResult",
    "Synthesizer",
    "DEFAULT_LOCALE",
    "DEFAULT_REQUEST_URI",
    "DEFAULT_VOICE_GENDER",
    "DEFAULT_VOICE_NAME",
    # HTTP
    "HttpAudioStream",
    "HttpAuthenticator",
    "HttpSynthesizer",
    "build_headers",
    "build_ssml",
    "DEFAULT_TOKEN_URI",
]
