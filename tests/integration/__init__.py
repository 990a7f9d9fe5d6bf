"""Integration tests for components working together as a system.

Coverage:
    - Relay endpoint with real HTTP requests over ASGI transport
    - Relay client and chat controller against the running app

The vendor service is a fake injected through create_app, so no API key
or network access is needed.
"""
