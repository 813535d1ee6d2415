"""
Input sentence corpus for format sweeps.

A corpus is a plain-text file with one sentence per line. Blank lines are
skipped.
"""

from pathlib import Path
from typing import Iterable, Optional

WARMUP_TEXT = "Hello this is a warmup."

DEFAULT_SENTENCES = [
    "Hello world.",
    "The quick brown fox jumps over the lazy dog.",
    "Please call Stella and ask her to bring these things with her from the store.",
    "It is expected to be sunny this afternoon with a high of seventy two degrees.",
    "Your flight to Seattle departs at nine forty five from gate twelve.",
]


def parse_sentences(lines: Iterable[str], limit: Optional[int] = None) -> list[str]:
    """Strip lines, drop blanks and keep at most ``limit`` sentences."""
    sentences = [line.strip() for line in lines if line.strip()]
    if limit is not None:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        sentences = sentences[:limit]
    return sentences


def load_sentences(path: Path, limit: Optional[int] = None, encoding: str = "utf-8") -> list[str]:
    """Read a corpus file.

    Raises:
        ValueError: If the file contains no sentences.
    """
    with open(path, encoding=encoding) as f:
        sentences = parse_sentences(f, limit)
    if not sentences:
        raise ValueError(f"No sentences found in {path}")
    return sentences
