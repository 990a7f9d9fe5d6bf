"""Intent routing shared by the relay and the chat UI.

Both ends import the same predicate so their classification never drifts.
"""

from src.routing.intent import Intent, classify, extract_image_prompt, is_image_request

__all__ = ["Intent", "classify", "extract_image_prompt", "is_image_request"]
