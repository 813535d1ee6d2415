"""
Tests for sentence corpus loading.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from tts_latency_lab.scenarios.corpus import DEFAULT_SENTENCES, load_sentences, parse_sentences


class TestParseSentences:
    def test_strips_and_skips_blank_lines(self) -> None:
        assert parse_sentences(["  Hello world.\n", "\n", "Second one.\r\n", "   "]) == [
            "Hello world.",
            "Second one.",
        ]

    def test_limit(self) -> None:
        assert parse_sentences(["a", "b", "c"], limit=2) == ["a", "b"]

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            parse_sentences(["a"], limit=0)


class TestLoadSentences:
    def test_reads_one_sentence_per_line(self, tmp_path: Path) -> None:
        corpus = tmp_path / "en-US.txt"
        corpus.write_text("First sentence.\nSecond sentence.\n\nThird sentence.\n", encoding="utf-8")
        assert load_sentences(corpus) == ["First sentence.", "Second sentence.", "Third sentence."]

    def test_empty_file(self, tmp_path: Path) -> None:
        corpus = tmp_path / "empty.txt"
        corpus.write_text("\n\n", encoding="utf-8")
        with pytest.raises(ValueError, match="No sentences"):
            load_sentences(corpus)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_sentences(tmp_path / "missing.txt")

    def test_default_sentences(self) -> None:
        assert DEFAULT_SENTENCES
        assert all(s.strip() == s and s for s in DEFAULT_SENTENCES)
