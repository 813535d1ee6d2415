"""
Audio output formats supported by the synthesis service.

Declaration order is the sweep order and therefore the report row order.
"""

from enum import Enum
from typing import Optional


class OutputFormat(Enum):
    """Audio encodings the service can return, keyed by wire identifier."""

    RAW_8KHZ_8BIT_MONO_MULAW = "raw-8khz-8bit-mono-mulaw"
    RAW_16KHZ_16BIT_MONO_PCM = "raw-16khz-16bit-mono-pcm"
    RIFF_8KHZ_8BIT_MONO_MULAW = "riff-8khz-8bit-mono-mulaw"
    RIFF_16KHZ_16BIT_MONO_PCM = "riff-16khz-16bit-mono-pcm"
    SSML_16KHZ_16BIT_MONO_SILK = "ssml-16khz-16bit-mono-silk"
    RAW_16KHZ_16BIT_MONO_TRUESILK = "raw-16khz-16bit-mono-truesilk"
    SSML_16KHZ_16BIT_MONO_TTS = "ssml-16khz-16bit-mono-tts"
    AUDIO_16KHZ_128KBITRATE_MONO_MP3 = "audio-16khz-128kbitrate-mono-mp3"
    AUDIO_16KHZ_64KBITRATE_MONO_MP3 = "audio-16khz-64kbitrate-mono-mp3"
    AUDIO_16KHZ_32KBITRATE_MONO_MP3 = "audio-16khz-32kbitrate-mono-mp3"
    AUDIO_16KHZ_16KBPS_MONO_SIREN = "audio-16khz-16kbps-mono-siren"
    RIFF_16KHZ_16KBPS_MONO_SIREN = "riff-16khz-16kbps-mono-siren"

    @property
    def bytes_per_millisecond(self) -> Optional[int]:
        """Payload rate for uncompressed PCM encodings, None otherwise."""
        return _PCM_BYTES_PER_MS.get(self)

    @classmethod
    def parse(cls, name: str) -> "OutputFormat":
        """Look up a format by wire identifier or member name (case-insensitive)."""
        key = name.strip()
        for fmt in cls:
            if key.lower() == fmt.value or key.upper().replace("-", "_") == fmt.name:
                return fmt
        raise ValueError(f"Unknown output format: {name!r}")


# 16 kHz * 2 bytes * 1 channel = 32 bytes per millisecond
_PCM_BYTES_PER_MS = {
    OutputFormat.RAW_16KHZ_16BIT_MONO_PCM: 32,
    OutputFormat.RIFF_16KHZ_16BIT_MONO_PCM: 32,
}

# Format whose payload size is converted to an estimated audio duration
DURATION_REFERENCE_FORMAT = OutputFormat.RIFF_16KHZ_16BIT_MONO_PCM
