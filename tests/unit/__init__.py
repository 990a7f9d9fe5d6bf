"""Unit tests for individual components in isolation.

Coverage:
    - routing/: Intent classification and prompt extraction
    - vendor/: Configuration validation and OpenAI client calls
    - ui/: Chat session log and submission state machine

Uses mocks for external services.
"""
