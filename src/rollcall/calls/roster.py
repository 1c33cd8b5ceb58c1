"""
Roster extraction and merge helpers.

Turns command tokens and resolved Discord mentions into the ``mentions`` and
``npcs`` collections stored on a :class:`~rollcall.calls.model.Call`.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from .model import Mention

NPC_PREFIX = "+"


def extract_npcs(tokens: Iterable[str]) -> List[str]:
    """
    Collect NPC labels from ``+Name`` tokens.

    Only the opening quote is stripped, so ``+"Boss"`` yields ``Boss"``.
    Duplicates are dropped by exact match, keeping first-seen order.
    """
    npcs: List[str] = []
    for token in tokens:
        if not token.startswith(NPC_PREFIX):
            continue
        label = token[len(NPC_PREFIX):]
        if label.startswith('"'):
            label = label[1:]
        if label not in npcs:
            npcs.append(label)
    return npcs


def _to_mention(member: Any) -> Mention:
    name = getattr(member, "display_name", None) or getattr(member, "name", "")
    return Mention(id=int(member.id), name=str(name))


def flatten_mentions(members: Iterable[Any], roles: Iterable[Any] = ()) -> List[Mention]:
    """
    Flatten direct mentions and role members into one id-unique list.

    :param members: Mentioned users/members (anything with ``id`` and
        ``display_name``).
    :param roles: Mentioned roles; every member of each role is included.
    :returns: Mentions in first-seen order, direct mentions before role members.
    """
    found = [_to_mention(m) for m in members]
    for role in roles:
        found.extend(_to_mention(m) for m in getattr(role, "members", None) or [])
    return merge_mentions([], found)


def merge_mentions(existing: Sequence[Mention], incoming: Iterable[Mention]) -> List[Mention]:
    """
    Union ``incoming`` into ``existing`` keyed by ``id``.

    Ids already present keep their stored entry; the incoming display name is
    ignored for them.
    """
    merged = list(existing)
    seen = {m.id for m in merged}
    for mention in incoming:
        if mention.id in seen:
            continue
        seen.add(mention.id)
        merged.append(mention)
    return merged


def merge_npcs(existing: Sequence[str], incoming: Iterable[str]) -> List[str]:
    """Union ``incoming`` NPC labels into ``existing`` by exact string equality."""
    merged = list(existing)
    for npc in incoming:
        if npc not in merged:
            merged.append(npc)
    return merged


def split_tokens(raw: str | None) -> List[str]:
    """Split raw command arguments on whitespace."""
    return (raw or "").split()


__all__ = [
    "extract_npcs",
    "flatten_mentions",
    "merge_mentions",
    "merge_npcs",
    "split_tokens",
]
