"""
Active-call index
=================

``CallStore`` owns the single open :class:`Call` per channel. Every mutating
operation runs under that channel's lock as one check-and-mutate step,
persists through the optional repository, and hands back a snapshot so the
caller can await Discord I/O without holding the live record.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterable, List, Optional

from .errors import AlreadyActive, NoActiveCall
from .model import Call, CallResults, Mention, Roll, utcnow
from .roster import merge_mentions, merge_npcs
from .sql.repositories import CallsRepo

logger = logging.getLogger(__name__)


class CallStore:
    """Per-channel registry of active calls."""

    def __init__(self, repo: Optional[CallsRepo] = None) -> None:
        self._repo = repo
        self._active: Dict[int, Call] = {}
        # Locks live only while some operation holds or waits on them
        self._locks: Dict[int, asyncio.Lock] = {}
        self._lock_users: Dict[int, int] = {}

    async def load(self) -> int:
        """
        Hydrate the active index from the repository.

        :returns: Number of active calls restored.
        """
        if self._repo is None:
            return 0

        calls = await self._repo.load_active()
        self._active = {call.channel: call for call in calls if call.active}
        logger.info("Restored %d active call(s)", len(self._active))
        return len(self._active)

    def find_active(self, channel: int) -> Optional[Call]:
        """Return a snapshot of the channel's active call, or ``None``."""
        call = self._active.get(channel)
        return call.snapshot() if call is not None else None

    def active_count(self) -> int:
        return len(self._active)

    @asynccontextmanager
    async def _channel_lock(self, channel: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(channel, asyncio.Lock())
        self._lock_users[channel] = self._lock_users.get(channel, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[channel] -= 1
            if not self._lock_users[channel]:
                del self._lock_users[channel]
                del self._locks[channel]

    def _require(self, channel: int) -> Call:
        call = self._active.get(channel)
        if call is None:
            raise NoActiveCall()
        return call

    async def _persist(self, call: Call) -> None:
        if self._repo is None:
            return
        call.id = await self._repo.upsert(call)

    async def open(
        self,
        channel: int,
        name: str,
        text: str,
        mentions: Iterable[Mention] = (),
        npcs: Iterable[str] = (),
    ) -> Call:
        """Start a call in ``channel``; raises :class:`AlreadyActive` if one is open."""
        async with self._channel_lock(channel):
            if channel in self._active:
                raise AlreadyActive()

            call = Call(
                channel=channel,
                name=name,
                text=text,
                start=utcnow(),
                mentions=merge_mentions([], mentions),
                npcs=merge_npcs([], npcs),
            )
            await self._persist(call)
            self._active[channel] = call
            logger.info("Opened call %r in channel %s", call.name, channel)
            return call.snapshot()

    async def add_roster(
        self,
        channel: int,
        mentions: Iterable[Mention] = (),
        npcs: Iterable[str] = (),
    ) -> Call:
        """Union new participants and NPCs into the active call."""
        async with self._channel_lock(channel):
            call = self._require(channel)
            call.mentions = merge_mentions(call.mentions, mentions)
            call.npcs = merge_npcs(call.npcs, npcs)
            await self._persist(call)
            return call.snapshot()

    async def refresh(self, channel: int) -> Call:
        """
        Return the active call for re-rendering.

        The new display message id is written back with :meth:`set_message`.
        """
        async with self._channel_lock(channel):
            return self._require(channel).snapshot()

    async def set_message(self, channel: int, message_id: int) -> Call:
        """Record the id of the active call's display message."""
        async with self._channel_lock(channel):
            call = self._require(channel)
            call.message = message_id
            await self._persist(call)
            return call.snapshot()

    async def append_roll(
        self, channel: int, name: str, roll: int, log: Optional[str] = None
    ) -> Call:
        """
        Record a resolved roll against the active call.

        :param log: Log line to append; defaults to ``"<name> rolled <roll>"``.
        """
        async with self._channel_lock(channel):
            call = self._require(channel)
            call.rolls.append(Roll(name=name, roll=int(roll)))
            call.logs.append(log if log is not None else f"{name} rolled {roll}")
            await self._persist(call)
            return call.snapshot()

    async def close(self, channel: int) -> CallResults:
        """
        End the active call and return it with its sorted standings.

        The check, ``end`` stamp and removal from the index happen under one
        lock, so no roll can land between the snapshot and the removal.
        """
        async with self._channel_lock(channel):
            call = self._require(channel)
            closed = call.snapshot()
            closed.end = utcnow()
            # The live record keeps end=None until the closed state is stored
            await self._persist(closed)
            call.end = closed.end
            del self._active[channel]
            logger.info(
                "Closed call %r in channel %s with %d roll(s)",
                call.name,
                channel,
                len(call.rolls),
            )
            return CallResults(call=closed, standings=closed.standings())

    async def log(self, channel: int) -> List[str]:
        """Return the active call's roll log in insertion order."""
        async with self._channel_lock(channel):
            return list(self._require(channel).logs)

    async def shutdown(self) -> None:
        """Release the repository connection."""
        if self._repo is not None:
            await self._repo.close()


__all__ = ["CallStore"]
