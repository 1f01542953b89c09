from __future__ import annotations


class AssistantError(Exception):
    pass


class ChatValidationError(AssistantError):
    """Bad chat input; surfaced to the caller as a client error."""
