"""Unit tests for VendorService.

The OpenAI client is replaced with mocks; no network access.
"""

from collections.abc import AsyncGenerator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.vendor.client import VendorError, VendorService
from src.vendor.config import RelayConfig

IMAGE_URL = "https://example.com/img.png"


def _delta(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


async def _stream(*chunks: SimpleNamespace) -> AsyncGenerator[SimpleNamespace]:
    for chunk in chunks:
        yield chunk


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig(
        openai_api_key="sk-test-key",
        chat_model="gpt-4",
        image_model="dall-e-3",
    )


@pytest.fixture
def openai_client() -> MagicMock:
    client = MagicMock()
    client.images.generate = AsyncMock(
        return_value=SimpleNamespace(data=[SimpleNamespace(url=IMAGE_URL)])
    )
    client.chat.completions.create = AsyncMock(
        return_value=_stream(_delta("Hel"), _delta(None), _delta(""), _delta("lo"))
    )
    return client


class TestVendorServiceInit:
    """Tests for VendorService client construction."""

    @patch("src.vendor.client.AsyncOpenAI")
    def test_builds_client_from_config(self, mock_openai: MagicMock) -> None:
        """AsyncOpenAI is created once with the configured key and base URL."""
        config = RelayConfig(openai_api_key="sk-custom", base_url="http://proxy/v1")

        VendorService(config=config)

        mock_openai.assert_called_once_with(api_key="sk-custom", base_url="http://proxy/v1")

    @patch("src.vendor.client.AsyncOpenAI")
    def test_uses_injected_client(self, mock_openai: MagicMock, config: RelayConfig) -> None:
        """An injected client is used as-is."""
        client = MagicMock()

        service = VendorService(config=config, client=client)

        mock_openai.assert_not_called()
        assert service._client is client


class TestGenerateImage:
    """Tests for single image generation."""

    async def test_requests_one_fixed_size_image(
        self, config: RelayConfig, openai_client: MagicMock
    ) -> None:
        """Image endpoint gets the prompt with fixed model, size, quality and n=1."""
        service = VendorService(config=config, client=openai_client)

        url = await service.generate_image("sunset")

        assert url == IMAGE_URL
        openai_client.images.generate.assert_awaited_once_with(
            model="dall-e-3",
            prompt="sunset",
            size="1024x1024",
            quality="standard",
            n=1,
        )

    async def test_missing_url_raises(self, config: RelayConfig, openai_client: MagicMock) -> None:
        """A response without a URL is a vendor error."""
        openai_client.images.generate.return_value = SimpleNamespace(
            data=[SimpleNamespace(url=None)]
        )
        service = VendorService(config=config, client=openai_client)

        with pytest.raises(VendorError, match="no URL"):
            await service.generate_image("sunset")

    async def test_empty_data_raises(self, config: RelayConfig, openai_client: MagicMock) -> None:
        """A response with no images is a vendor error."""
        openai_client.images.generate.return_value = SimpleNamespace(data=[])
        service = VendorService(config=config, client=openai_client)

        with pytest.raises(VendorError):
            await service.generate_image("sunset")


class TestStreamChat:
    """Tests for streaming chat completions."""

    async def test_yields_non_empty_deltas(
        self, config: RelayConfig, openai_client: MagicMock
    ) -> None:
        """Empty and missing deltas are skipped; text arrives in order."""
        service = VendorService(config=config, client=openai_client)

        chunks = [chunk async for chunk in service.stream_chat("hi there")]

        assert chunks == ["Hel", "lo"]

    async def test_sends_single_user_turn(
        self, config: RelayConfig, openai_client: MagicMock
    ) -> None:
        """The raw message is sent as the only user turn with streaming on."""
        service = VendorService(config=config, client=openai_client)

        async for _ in service.stream_chat("what is the capital of France"):
            pass

        openai_client.chat.completions.create.assert_awaited_once_with(
            model="gpt-4",
            messages=[{"role": "user", "content": "what is the capital of France"}],
            stream=True,
        )

    async def test_skips_chunks_without_choices(
        self, config: RelayConfig, openai_client: MagicMock
    ) -> None:
        """Chunks carrying no choices (e.g. usage frames) produce no text."""
        openai_client.chat.completions.create.return_value = _stream(
            SimpleNamespace(choices=[]), _delta("ok")
        )
        service = VendorService(config=config, client=openai_client)

        chunks = [chunk async for chunk in service.stream_chat("hi")]

        assert chunks == ["ok"]

    async def test_upstream_error_propagates(
        self, config: RelayConfig, openai_client: MagicMock
    ) -> None:
        """Errors from the chat endpoint are not swallowed."""
        openai_client.chat.completions.create.side_effect = RuntimeError("upstream down")
        service = VendorService(config=config, client=openai_client)

        with pytest.raises(RuntimeError, match="upstream down"):
            async for _ in service.stream_chat("hi"):
                pass
