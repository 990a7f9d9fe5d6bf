"""HTTP client the chat UI uses to talk to the relay."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
RELAY_PATH = "/dalle"


class RelayClientError(Exception):
    """Raised when the relay answers with an unusable payload."""

    pass


class RelayClient:
    """Calls POST /dalle and exposes the two response shapes."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._base_url = base_url
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
            timeout=self._timeout,
        )

    @asynccontextmanager
    async def open_chat_stream(self, message: str) -> AsyncIterator[AsyncIterator[str]]:
        """Open a streaming chat response.

        The status is checked before anything is yielded, so callers only
        see a text iterator once the relay has accepted the request.

        Args:
            message: The user's message.

        Yields:
            Async iterator of decoded text chunks.

        Raises:
            httpx.HTTPStatusError: Relay answered with a non-2xx status.
            httpx.RequestError: Connection failed or the stream broke.
        """
        async with (
            self._client() as client,
            client.stream("POST", RELAY_PATH, json={"message": message}) as response,
        ):
            response.raise_for_status()
            yield response.aiter_text()

    async def generate_image(self, message: str) -> str:
        """Request an image and return its URL.

        Args:
            message: The user's message, sent unchanged.

        Returns:
            The generated image URL.

        Raises:
            httpx.HTTPStatusError: Relay answered with a non-2xx status.
            RelayClientError: Response body is not a URL string.
        """
        async with self._client() as client:
            response = await client.post(RELAY_PATH, json={"message": message})
            response.raise_for_status()

        url = response.json()
        if not isinstance(url, str) or not url:
            raise RelayClientError(f"Unexpected image response: {url!r}")
        return url
