"""
Format sweep benchmark - first/last byte latency per audio output format.

Authenticates once, then speaks every sentence in every output format and
reports the average first and last byte latency for each format.
"""

from typing import Optional, Sequence

from ...harness.reporter import ConsoleReporter
from ...harness.runner import SweepConfig, SweepDriver, SweepOutcome
from ...instrumentation.traces import Tracer
from ...synthesis.base import Authenticator, Synthesizer
from ...synthesis.formats import OutputFormat
from ...synthesis.http_client import DEFAULT_TOKEN_URI, HttpAuthenticator, HttpSynthesizer


class FormatSweepSuite:
    """Runs a format sweep against the HTTP synthesis service.

    Usage:
        suite = FormatSweepSuite(api_key="...")
        outcome = await suite.run(["Hello world."])
        print(outcome.report.render())
    """

    def __init__(
        self,
        api_key: str,
        config: Optional[SweepConfig] = None,
        token_uri: str = DEFAULT_TOKEN_URI,
        timeout_seconds: float = 60.0,
        use_color: bool = True,
        tracer: Optional[Tracer] = None,
    ):
        self.api_key = api_key
        self.config = config or SweepConfig()
        self.token_uri = token_uri
        self.timeout_seconds = timeout_seconds
        self.reporter = ConsoleReporter(use_color=use_color)
        self.tracer = tracer

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message)

    async def authenticate(self, authenticator: Optional[Authenticator] = None) -> str:
        """Fetch an access token. AuthenticationError propagates to the caller."""
        self._log("Starting Authentication")
        if authenticator is not None:
            return await authenticator.get_access_token(self.api_key)

        async with HttpAuthenticator(
            self.token_uri, timeout_seconds=self.timeout_seconds
        ) as http_authenticator:
            return await http_authenticator.get_access_token(self.api_key)

    async def run(
        self,
        sentences: Sequence[str],
        formats: Optional[Sequence[OutputFormat]] = None,
        authenticator: Optional[Authenticator] = None,
        synthesizer: Optional[Synthesizer] = None,
    ) -> SweepOutcome:
        """Authenticate, then sweep all formats (declaration order by default)."""
        if not sentences:
            raise ValueError("At least one sentence is required")
        formats = list(OutputFormat) if formats is None else list(formats)
        if not formats:
            raise ValueError("At least one output format is required")

        token = await self.authenticate(authenticator)
        self._log("Starting format sweep.")

        if synthesizer is not None:
            return await self._sweep(synthesizer, formats, sentences, token)

        async with HttpSynthesizer(timeout_seconds=self.timeout_seconds) as http_synthesizer:
            return await self._sweep(http_synthesizer, formats, sentences, token)

    async def _sweep(
        self,
        synthesizer: Synthesizer,
        formats: Sequence[OutputFormat],
        sentences: Sequence[str],
        token: str,
    ) -> SweepOutcome:
        driver = SweepDriver(
            synthesizer,
            config=self.config,
            reporter=self.reporter,
            tracer=self.tracer,
        )
        return await driver.run(formats, sentences, token)
