"""Pydantic models for relay requests, responses and chat messages.

Models:
    - RelayRequest: Incoming relay payload
    - ErrorResponse: Generic 500 body
    - Message: One chat bubble in the UI's message log
"""

from src.models.schemas import ErrorResponse, Message, RelayRequest, Role

__all__ = ["ErrorResponse", "Message", "RelayRequest", "Role"]
