"""Relay endpoint routing messages to chat streaming or image generation.

Handles payload validation, intent classification, and the upstream call.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse

from src.models.schemas import ErrorResponse, RelayRequest
from src.routing.intent import Intent, classify, extract_image_prompt
from src.vendor.client import VendorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_vendor_service(app: FastAPI) -> VendorService:
    """Return the vendor service injected into the app.

    Builds one from environment configuration on first use when the app
    was created without an explicit service.

    Args:
        app: The FastAPI application holding the service on its state.

    Returns:
        The shared VendorService instance.
    """
    vendor_service: VendorService | None = getattr(app.state, "vendor_service", None)
    if vendor_service is None:
        vendor_service = VendorService()
        app.state.vendor_service = vendor_service
    return vendor_service


async def _relay_chunks(first: str | None, rest: AsyncIterator[str]) -> AsyncGenerator[bytes]:
    """Encode upstream text fragments as they arrive.

    Args:
        first: Fragment already read to confirm the upstream call started.
        rest: Remaining upstream fragments.

    Yields:
        UTF-8 encoded fragments, one per upstream delta.
    """
    if first is None:
        return
    yield first.encode("utf-8")

    try:
        async for chunk in rest:
            yield chunk.encode("utf-8")
    except Exception as e:
        # Headers are already sent, so the only option left is to abort
        logger.error(f"Upstream chat stream failed mid-response: {e}")
        raise


async def _image_response(vendor: VendorService, message: str) -> Response:
    prompt = extract_image_prompt(message)
    logger.info(f"Routing to image generation with prompt: {prompt!r}")

    url = await vendor.generate_image(prompt)
    return JSONResponse(content=url, status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


async def _chat_response(vendor: VendorService, message: str) -> Response:
    logger.info("Routing to streaming chat completion")

    chunks = vendor.stream_chat(message)
    # Reading the first fragment surfaces connection and auth failures as a 500
    try:
        first = await anext(chunks, None)
    except Exception:
        await chunks.aclose()
        raise

    return StreamingResponse(
        _relay_chunks(first, chunks),
        media_type="text/plain",
        headers=CORS_HEADERS,
    )


@router.post("/dalle")
async def relay_message(request: Request) -> Response:
    """Relay a chat message to the vendor API.

    Image requests return the generated image URL as a JSON string.
    Everything else streams the chat completion back as plain text.

    Args:
        request: Raw request; body is JSON ``{"message": "..."}``.

    Returns:
        JSON string response or a streaming text response.

    Raises:
        400: Missing or empty message (plain text body).
        500: Any other failure (generic JSON body).
    """
    try:
        body = await request.body()
        payload = RelayRequest.model_validate_json(body or b"{}")

        if not payload.message:
            return PlainTextResponse("Message is required", status_code=status.HTTP_400_BAD_REQUEST)

        vendor = get_vendor_service(request.app)

        if classify(payload.message) is Intent.IMAGE:
            return await _image_response(vendor, payload.message)
        return await _chat_response(vendor, payload.message)

    except Exception as e:
        logger.error(f"Relay request failed: {e}")
        return JSONResponse(
            content=ErrorResponse().model_dump(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
