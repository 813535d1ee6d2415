"""
Benchmark modules for TTS latency testing.
"""

from . import format_sweep

__all__ = [
    "format_sweep",
]
