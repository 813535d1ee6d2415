"""
HTTP clients for the token and synthesis endpoints.

The synthesizer POSTs an SSML document and hands back the response body as an
AudioStream without reading it, so the caller can time the first and last
chunk itself.

Usage:
    async with HttpSynthesizer() as synthesizer:
        result = await synthesizer.speak(request)
"""

import asyncio
import uuid
from typing import AsyncIterator, Optional
from xml.sax.saxutils import escape, quoteattr

import aiohttp

from ..exceptions import AuthenticationError, TransportError
from .base import Authenticator, SynthesisRequest, SynthesisResult, Synthesizer

DEFAULT_TOKEN_URI = "https://api.cognitive.microsoft.com/sts/v1.0/issueToken"
DEFAULT_USER_AGENT = "TTSClient"


def build_ssml(request: SynthesisRequest) -> str:
    """Render the SSML document for a request."""
    return (
        f"<speak version='1.0' xml:lang={quoteattr(request.locale)}>"
        f"<voice xml:lang={quoteattr(request.locale)}"
        f" xml:gender={quoteattr(request.voice_gender)}"
        f" name={quoteattr(request.voice_name)}>"
        f"{escape(request.text)}"
        "</voice></speak>"
    )


def build_headers(
    request: SynthesisRequest,
    app_id: str,
    client_id: str,
    user_agent: str = DEFAULT_USER_AGENT,
) -> dict[str, str]:
    """Build the HTTP headers for a synthesis request."""
    token = request.authorization_token
    if not token.startswith("Bearer "):
        token = f"Bearer {token}"
    return {
        "Content-Type": "application/ssml+xml",
        "X-Microsoft-OutputFormat": request.output_format.value,
        "Authorization": token,
        "X-Search-AppId": app_id,
        "X-Search-ClientID": client_id,
        "User-Agent": user_agent,
    }


class HttpAudioStream:
    """Streams a response body in chunks and releases it exactly once."""

    def __init__(self, response: aiohttp.ClientResponse, chunk_size: int = 8192):
        self._response = response
        self._chunk_size = chunk_size
        self._closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        async for chunk in self._response.content.iter_chunked(self._chunk_size):
            yield chunk

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._response.release()

    @property
    def closed(self) -> bool:
        return self._closed


class _SessionOwner:
    """Shared aiohttp session handling for the clients below."""

    def __init__(self, session: Optional[aiohttp.ClientSession], timeout_seconds: float):
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class HttpAuthenticator(_SessionOwner, Authenticator):
    """Fetches an access token from the token issuing endpoint."""

    def __init__(
        self,
        token_uri: str = DEFAULT_TOKEN_URI,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_seconds: float = 30.0,
    ):
        super().__init__(session, timeout_seconds)
        self.token_uri = token_uri

    async def get_access_token(self, api_key: str) -> str:
        if not api_key:
            raise AuthenticationError("No API key provided")

        session = await self._ensure_session()
        try:
            async with session.post(
                self.token_uri,
                headers={"Ocp-Apim-Subscription-Key": api_key},
                data=b"",
            ) as resp:
                body = await resp.text()
                if resp.status != 200:
                    raise AuthenticationError(
                        f"Token request failed with HTTP {resp.status}: {body[:200]}"
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationError(f"Token request failed: {e}") from e

        token = body.strip()
        if not token:
            raise AuthenticationError("Token endpoint returned an empty token")
        return token


class HttpSynthesizer(_SessionOwner, Synthesizer):
    """Synthesizer speaking the SSML-over-HTTP protocol."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_seconds: float = 60.0,
        chunk_size: int = 8192,
        app_id: Optional[str] = None,
        client_id: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        super().__init__(session, timeout_seconds)
        self.chunk_size = chunk_size
        self.app_id = app_id or uuid.uuid4().hex
        self.client_id = client_id or uuid.uuid4().hex
        self.user_agent = user_agent

    async def speak(self, request: SynthesisRequest) -> SynthesisResult:
        session = await self._ensure_session()
        fmt = request.output_format.value
        try:
            response = await session.post(
                request.request_uri,
                data=build_ssml(request).encode("utf-8"),
                headers=build_headers(request, self.app_id, self.client_id, self.user_agent),
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return SynthesisResult.failure(
                TransportError(f"Synthesis request failed: {e!r}", output_format=fmt)
            )

        if response.status != 200:
            status, reason = response.status, response.reason
            response.release()
            return SynthesisResult.failure(
                TransportError(f"HTTP {status} {reason}", output_format=fmt, status=status)
            )

        return SynthesisResult.success(HttpAudioStream(response, self.chunk_size))
