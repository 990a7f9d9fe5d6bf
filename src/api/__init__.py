"""FastAPI endpoints for the DALL-E chat relay.

Endpoints:
    - GET /health: Service health status
    - POST /dalle: Chat streaming or image generation, chosen per message
"""

from src.api.app import build_app, create_app

__all__ = ["build_app", "create_app"]
