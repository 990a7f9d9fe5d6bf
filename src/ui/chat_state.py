"""Chat view state and the per-submission state machine.

Kept separate from NiceGUI widgets so the flow can be driven without a browser.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager
from enum import Enum
from typing import Protocol

from src.models.schemas import Message, Role
from src.routing.intent import is_image_request

logger = logging.getLogger(__name__)

IMAGE_CAPTION = "Here's your generated image:"
ERROR_MESSAGE = "Sorry, there was an error processing your request."


class SubmissionPhase(str, Enum):
    """Where the current submission is in its lifecycle."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    STREAMING_CHAT = "streaming-chat"
    AWAITING_IMAGE = "awaiting-image"


class ChatBackend(Protocol):
    def open_chat_stream(self, message: str) -> AbstractAsyncContextManager[AsyncIterator[str]]: ...

    async def generate_image(self, message: str) -> str: ...


class ChatSession:
    """Message log for one browser session.

    Messages are only ever appended. A chat reply is written into an explicit
    streaming target instead of whatever happens to be last in the list.
    """

    def __init__(self) -> None:
        self.messages: list[Message] = []
        self.phase: SubmissionPhase = SubmissionPhase.IDLE
        self.streaming_target: Message | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def is_busy(self) -> bool:
        return self.phase is not SubmissionPhase.IDLE

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def _append(self, message: Message) -> Message:
        self.messages.append(message)
        self._notify()
        return message

    def begin(self, text: str) -> Message:
        self.phase = SubmissionPhase.SUBMITTING
        return self._append(Message(role=Role.USER, content=text))

    def await_image(self) -> None:
        self.phase = SubmissionPhase.AWAITING_IMAGE
        self._notify()

    def add_image(self, url: str) -> Message:
        return self._append(Message(role=Role.ASSISTANT, content=IMAGE_CAPTION, image_url=url))

    def open_stream(self) -> Message:
        """Append the empty placeholder that receives the streamed reply."""
        self.phase = SubmissionPhase.STREAMING_CHAT
        self.streaming_target = Message(role=Role.ASSISTANT, content="")
        return self._append(self.streaming_target)

    def update_stream(self, content: str) -> None:
        """Replace the streaming target's content with the running buffer."""
        if self.streaming_target is None:
            raise RuntimeError("No streaming message to update")
        self.streaming_target.content = content
        self._notify()

    def close_stream(self) -> None:
        self.streaming_target = None

    def fail(self) -> Message:
        """Record the fixed error message as the reply to the current submission.

        A partial streamed reply is overwritten in place so no fragment of it
        remains; otherwise the error message is appended.
        """
        target = self.streaming_target
        if target is None:
            return self._append(Message(role=Role.ASSISTANT, content=ERROR_MESSAGE))

        self.streaming_target = None
        target.content = ERROR_MESSAGE
        self._notify()
        return target

    def finish(self) -> None:
        self.phase = SubmissionPhase.IDLE
        self._notify()


class ChatController:
    """Runs one submission at a time against the relay."""

    def __init__(self, session: ChatSession, backend: ChatBackend) -> None:
        self.session = session
        self.backend = backend

    async def submit(self, text: str) -> bool:
        """Send a user message and record the reply in the session.

        Args:
            text: Raw input text. Surrounding whitespace is ignored.

        Returns:
            False if the message was empty or another submission is running.
        """
        text = text.strip()
        if not text or self.session.is_busy:
            return False

        self.session.begin(text)
        try:
            if is_image_request(text):
                await self._request_image(text)
            else:
                await self._stream_chat(text)
        except Exception as e:
            logger.error(f"Chat submission failed: {e}")
            self.session.fail()
        finally:
            self.session.finish()
        return True

    async def _request_image(self, text: str) -> None:
        self.session.await_image()
        url = await self.backend.generate_image(text)
        self.session.add_image(url)

    async def _stream_chat(self, text: str) -> None:
        async with self.backend.open_chat_stream(text) as chunks:
            self.session.open_stream()
            buffer = ""
            async for chunk in chunks:
                buffer += chunk
                self.session.update_stream(buffer)
        self.session.close_stream()
