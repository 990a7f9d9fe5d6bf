"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_vendor: Stand-in for the OpenAI vendor service
    - relay_app: FastAPI app with the fake vendor injected
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app

SAMPLE_IMAGE_URL = "https://example.com/img.png"


class FakeVendorService:
    """Records upstream calls and replays canned responses."""

    def __init__(self) -> None:
        self.chat_chunks: list[str] = ["Hel", "lo"]
        self.image_url: str = SAMPLE_IMAGE_URL
        self.chat_error: Exception | None = None
        self.image_error: Exception | None = None
        self.mid_stream_error: Exception | None = None
        self.chat_messages: list[str] = []
        self.image_prompts: list[str] = []

    async def stream_chat(self, message: str) -> AsyncGenerator[str]:
        self.chat_messages.append(message)
        if self.chat_error is not None:
            raise self.chat_error
        for chunk in self.chat_chunks:
            yield chunk
        if self.mid_stream_error is not None:
            raise self.mid_stream_error

    async def generate_image(self, prompt: str) -> str:
        self.image_prompts.append(prompt)
        if self.image_error is not None:
            raise self.image_error
        return self.image_url


@pytest.fixture
def fake_vendor() -> FakeVendorService:
    """Return a fresh fake vendor service."""
    return FakeVendorService()


@pytest.fixture
def relay_app(fake_vendor: FakeVendorService) -> FastAPI:
    """Create the app with the fake vendor injected."""
    return create_app(vendor_service=fake_vendor)


@pytest.fixture
async def async_client(relay_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=relay_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
