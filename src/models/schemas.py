from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class RelayRequest(BaseModel):
    """Request payload for the relay endpoint.

    The message is optional at the schema level so the route can answer
    a missing value with its own 400 response instead of a 422.

    Attributes:
        message: User's free-text message.
    """

    message: str | None = None


class ErrorResponse(BaseModel):
    """Body returned for any unexpected relay failure."""

    error: str = "Internal Server Error"


class Message(BaseModel):
    """A single chat message shown in the UI.

    Attributes:
        role: Who wrote the message.
        content: The message text. Grows in place while a reply streams.
        image_url: URL of a generated image, serialised as ``imageUrl``.
    """

    model_config = ConfigDict(populate_by_name=True)

    role: Role
    content: str = ""
    image_url: str | None = Field(default=None, alias="imageUrl")
