"""
TTS Latency Lab - latency benchmarking for streamed text-to-speech services.

Sweeps every sentence of a corpus through every audio output format and
reports average first and last byte latency per format.

Key modules:
- benchmarks: The format sweep suite
- instrumentation: Timing, stream consumption and tracing
- harness: Sweep orchestration and reporting
- scenarios: Input sentence corpora
- synthesis: Synthesizer interfaces, output formats and HTTP clients
"""

__version__ = "0.1.0"

from . import benchmarks
from . import instrumentation
from . import harness
from . import scenarios
from . import synthesis

__all__ = [
    "benchmarks",
    "instrumentation",
    "harness",
    "scenarios",
    "synthesis",
]
