"""
Input corpora for TTS latency benchmarking.
"""

from .corpus import (
    WARMUP_TEXT,
    DEFAULT_SENTENCES,
    load_sentences,
    parse_sentences,
)

__all__ = [
    "WARMUP_TEXT",
    "DEFAULT_SENTENCES",
    "load_sentences",
    "parse_sentences",
]
