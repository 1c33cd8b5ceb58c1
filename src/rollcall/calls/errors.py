"""
Expected, user-facing failures for call commands.

Each error carries one fixed advisory ``message`` (and an optional ``hint``)
that the command layer sends back verbatim. None of them are retried.
"""

from __future__ import annotations


class CallError(Exception):
    """Base class for call precondition failures."""

    message = "Something went wrong with that call."

    def __init__(self, message: str | None = None, *, hint: str | None = None) -> None:
        if message is not None:
            self.message = message
        self.hint = hint
        super().__init__(self.message)


class AlreadyActive(CallError):
    message = "You already have an active call in this channel."


class NoActiveCall(CallError):
    message = "There is not currently a roll call active."


class PermissionDenied(CallError):
    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"You do not have permission to {action}.")


class WrongContext(CallError):
    message = "This command does not work in direct messages."


__all__ = [
    "CallError",
    "AlreadyActive",
    "NoActiveCall",
    "PermissionDenied",
    "WrongContext",
]
