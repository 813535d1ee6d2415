"""
Stream consumption with first/last byte timing.
"""

from dataclasses import dataclass

from ..exceptions import StreamReadError
from ..synthesis.base import AudioStream
from .timing import Timer, TimingSample


@dataclass(frozen=True)
class ConsumedAudio:
    """Audio payload drained from a stream, with its timing sample."""

    data: bytes
    sample: TimingSample


async def consume_stream(stream: AudioStream, timer: Timer) -> ConsumedAudio:
    """Drain a response stream into memory, timing the first and last byte.

    The first-byte mark is taken when the first non-empty chunk arrives; the
    last-byte mark when the stream is exhausted. An empty stream gets equal
    marks. The stream is closed on every exit path.

    Raises:
        StreamReadError: If the stream fails mid-read. No sample is produced.
    """
    buffer = bytearray()
    first_byte_ms = None
    try:
        try:
            async for chunk in stream:
                if not chunk:
                    continue
                if first_byte_ms is None:
                    first_byte_ms = timer.elapsed_millis()
                buffer.extend(chunk)
        except Exception as e:
            raise StreamReadError(
                f"Stream failed after {len(buffer)} bytes: {e!r}"
            ) from e
        last_byte_ms = timer.elapsed_millis()
    finally:
        await stream.aclose()

    if first_byte_ms is None:
        first_byte_ms = last_byte_ms

    return ConsumedAudio(
        data=bytes(buffer),
        sample=TimingSample(
            first_byte_ms=first_byte_ms,
            last_byte_ms=last_byte_ms,
            bytes_read=len(buffer),
        ),
    )
