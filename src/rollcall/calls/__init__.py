"""
Public façade for roll calls
============================

Import from here::

    from rollcall.calls import CallStore, open_store, NoActiveCall, ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .errors import AlreadyActive, CallError, NoActiveCall, PermissionDenied, WrongContext
from .model import Call, CallResults, Mention, Roll
from .store import CallStore
from .sql import db as _db
from .sql.repositories import CallsRepo

logger = logging.getLogger(__name__)

__all__ = [
    "AlreadyActive",
    "Call",
    "CallError",
    "CallResults",
    "CallStore",
    "CallsRepo",
    "Mention",
    "NoActiveCall",
    "PermissionDenied",
    "Roll",
    "WrongContext",
    "open_store",
]


async def open_store(path: Optional[str] = None) -> CallStore:
    """
    Connect to SQLite, run migrations and return a hydrated :class:`CallStore`.

    :param path: Database path; defaults to ``config.storage.SQL_DB_PATH``.
    """
    conn = _db.connect(path)
    _db.migrate(conn)
    store = CallStore(CallsRepo(conn, asyncio.Lock()))
    await store.load()
    logger.info("Call store ready (%s)", path or _db.db_path())
    return store
