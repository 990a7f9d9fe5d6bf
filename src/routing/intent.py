"""Regex-based intent classification for incoming chat messages.

A message asks for an image when an action verb (generate, create, draw, make)
is followed anywhere later in the text by an artifact noun (image, picture,
artwork, drawing). Everything else is treated as conversational chat.
"""

import re
from enum import Enum

_IMAGE_INTENT = re.compile(
    r"(generate|create|draw|make).*(image|picture|artwork|drawing)",
    re.IGNORECASE,
)

# Only the first occurrence is removed. The trailing \b keeps an article from
# eating the first letter of the subject ("of apples" must not become "pples").
_REQUEST_PHRASE = re.compile(
    r"(can you |please |could you )?"
    r"(generate|create|draw|make)( me)?( an?| the)? "
    r"(image|picture|artwork|drawing)s?"
    r"( of| for)?( an?| the)?\b",
    re.IGNORECASE,
)


class Intent(str, Enum):
    """Which upstream endpoint a message is routed to."""

    CHAT = "chat"
    IMAGE = "image"


def is_image_request(message: str) -> bool:
    """Return True when the message asks for an image to be generated."""
    return _IMAGE_INTENT.search(message) is not None


def classify(message: str) -> Intent:
    """Classify a message as an image request or a chat request."""
    return Intent.IMAGE if is_image_request(message) else Intent.CHAT


def extract_image_prompt(message: str) -> str:
    """Strip request phrasing from a message to get the image prompt.

    Args:
        message: The raw user message, e.g. "can you generate an image of a sunset".

    Returns:
        The remaining subject ("sunset"). Falls back to the trimmed message
        when nothing would be left after stripping.
    """
    prompt = _REQUEST_PHRASE.sub("", message, count=1).strip()
    return prompt or message.strip()
