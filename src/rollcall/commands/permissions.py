"""Who may run mutating call commands."""

from __future__ import annotations

from typing import Any

from rollcall.config import core


def can_manage_calls(member: Any, channel: Any) -> bool:
    """
    Return ``True`` if ``member`` may start, edit or end calls in ``channel``.

    Members with *Manage Messages* in the channel always qualify; otherwise
    they need one of the configured ``MANAGER_ROLE_IDS``.
    """
    perms = channel.permissions_for(member)
    if getattr(perms, "manage_messages", False):
        return True

    role_ids = {role.id for role in getattr(member, "roles", None) or []}
    return bool(role_ids.intersection(core.MANAGER_ROLE_IDS))
