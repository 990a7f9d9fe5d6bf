"""DALL-E Chat Relay - chat front-end over OpenAI chat and image generation.

Combines FastAPI for HTTP streaming, the OpenAI SDK for upstream calls,
NiceGUI for the chat page, and Pydantic for configuration and schemas.

Components:
    - api: Relay endpoint and application factory
    - routing: Intent classification shared by relay and UI
    - vendor: OpenAI client and configuration
    - ui: Web interface for chat interactions
    - models: Request/response and message schemas
"""

__version__ = "0.1.0"
