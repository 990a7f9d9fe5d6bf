"""Test package for the DALL-E chat relay.

Structure:
    - unit/: Intent rules, configuration, vendor wrapper, UI state machine
    - integration/: Relay endpoint and relay client over ASGI transport

Upstream OpenAI calls are replaced by an injected fake vendor service.
Leverages pytest with pytest-check for soft assertions.
"""
