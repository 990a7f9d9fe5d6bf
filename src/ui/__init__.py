"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming support
    - Inline display of generated images
    - Disabling input while a request is in flight

Submission flow lives in chat_state so it can run without a browser.
All calls go through the relay over HTTP.
"""
