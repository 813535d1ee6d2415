"""
Tests for the format sweep suite.
"""
from __future__ import annotations

import pytest

from tts_latency_lab.benchmarks.format_sweep import FormatSweepSuite
from tts_latency_lab.exceptions import AuthenticationError
from tts_latency_lab.harness.runner import SweepConfig
from tts_latency_lab.synthesis.base import Authenticator
from tts_latency_lab.synthesis.formats import OutputFormat


class FakeAuthenticator(Authenticator):
    def __init__(self, token: str = "token", error: Exception | None = None):
        self.token = token
        self.error = error
        self.keys: list[str] = []

    async def get_access_token(self, api_key: str) -> str:
        self.keys.append(api_key)
        if self.error is not None:
            raise self.error
        return self.token


class TestFormatSweepSuite:
    """Tests for FormatSweepSuite."""

    @pytest.mark.asyncio
    async def test_auth_failure_aborts_before_synthesis(self, quiet_config: SweepConfig, make_synthesizer) -> None:
        """No synthesis request is made when authentication fails."""
        synthesizer = make_synthesizer()
        suite = FormatSweepSuite(api_key="bad", config=quiet_config, use_color=False)

        with pytest.raises(AuthenticationError):
            await suite.run(
                ["Hello world."],
                authenticator=FakeAuthenticator(error=AuthenticationError("HTTP 401")),
                synthesizer=synthesizer,
            )

        assert synthesizer.requests == []

    @pytest.mark.asyncio
    async def test_defaults_to_all_formats(self, quiet_config: SweepConfig, make_synthesizer) -> None:
        """Every declared format gets one row, in declaration order."""
        synthesizer = make_synthesizer()
        authenticator = FakeAuthenticator(token="tok")
        suite = FormatSweepSuite(api_key="key", config=quiet_config, use_color=False)

        outcome = await suite.run(["One.", "Two."], authenticator=authenticator, synthesizer=synthesizer)

        assert authenticator.keys == ["key"]
        assert [row.format_name for row in outcome.report.rows] == [fmt.value for fmt in OutputFormat]
        assert len(synthesizer.requests) == 2 * len(OutputFormat)
        assert all(request.authorization_token == "tok" for request in synthesizer.requests)
        assert outcome.calls_completed == 2 * len(OutputFormat)
        assert outcome.calls_failed == 0

    @pytest.mark.asyncio
    async def test_selected_formats(self, quiet_config: SweepConfig, make_synthesizer) -> None:
        synthesizer = make_synthesizer()
        suite = FormatSweepSuite(api_key="key", config=quiet_config, use_color=False)
        formats = [OutputFormat.AUDIO_16KHZ_32KBITRATE_MONO_MP3, OutputFormat.RIFF_16KHZ_16BIT_MONO_PCM]

        outcome = await suite.run(
            ["One."], formats=formats, authenticator=FakeAuthenticator(), synthesizer=synthesizer
        )

        assert [row.format_name for row in outcome.report.rows] == [
            "audio-16khz-32kbitrate-mono-mp3",
            "riff-16khz-16bit-mono-pcm",
        ]
        # 64 payload bytes at 32 bytes/ms
        assert outcome.duration_estimates_ms == [2.0]

    @pytest.mark.asyncio
    async def test_empty_sentences(self, quiet_config: SweepConfig, make_synthesizer) -> None:
        authenticator = FakeAuthenticator()
        suite = FormatSweepSuite(api_key="key", config=quiet_config)
        with pytest.raises(ValueError):
            await suite.run([], authenticator=authenticator, synthesizer=make_synthesizer())
        assert authenticator.keys == []

    @pytest.mark.asyncio
    async def test_logs_authentication(self, make_synthesizer, capsys) -> None:
        config = SweepConfig(warmup_text=None)
        suite = FormatSweepSuite(api_key="key", config=config, use_color=False)

        await suite.run(
            ["One."],
            formats=[OutputFormat.RIFF_16KHZ_16BIT_MONO_PCM],
            authenticator=FakeAuthenticator(),
            synthesizer=make_synthesizer(),
        )

        out = capsys.readouterr().out
        assert out.startswith("Starting Authentication")
        assert "AudioFormat = riff-16khz-16bit-mono-pcm" in out

    @pytest.mark.asyncio
    async def test_explicit_empty_formats_rejected(self, quiet_config: SweepConfig, make_synthesizer) -> None:
        """An empty format list is an error, not a request for every format."""
        authenticator = FakeAuthenticator()
        synthesizer = make_synthesizer()
        suite = FormatSweepSuite(api_key="key", config=quiet_config)

        with pytest.raises(ValueError, match="output format"):
            await suite.run(["One."], formats=[], authenticator=authenticator, synthesizer=synthesizer)

        assert synthesizer.requests == []
        assert authenticator.keys == []
