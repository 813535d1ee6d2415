"""
Format sweep benchmarks - latency per audio output format.
"""

from .benchmark import FormatSweepSuite

__all__ = [
    "FormatSweepSuite",
]
