"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.relay import router as relay_router
from src.vendor.client import VendorService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting DALL-E Chat Relay API...")
    yield
    logger.info("Shutting down DALL-E Chat Relay API...")


def create_app(vendor_service: VendorService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        vendor_service: Vendor client shared by all requests. Both run modes
            inject one; when omitted it is built from the environment on
            first use.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="DALL-E Chat Relay API",
        description=(
            "Relays chat messages to OpenAI. Image requests are answered with a "
            "generated image URL; everything else streams a chat completion."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.vendor_service = vendor_service

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(relay_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "dalle-chat-relay"}

    return application


def build_app() -> FastAPI:
    """Build the app with a vendor service created from the environment.

    Used as the uvicorn factory target so the API key is read at startup.

    Returns:
        Configured FastAPI application instance.

    Raises:
        ValueError: If no API key is set.
    """
    return create_app(vendor_service=VendorService())
