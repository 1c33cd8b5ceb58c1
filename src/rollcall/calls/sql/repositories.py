"""
Repositories (SQL-only)
=======================
- Pure CRUD over the ``calls`` table; no lifecycle rules live here.
"""

from __future__ import annotations
from typing import List, Optional
import asyncio
import json
import sqlite3

from ..model import Call
from .db import wal_checkpoint_truncate


def _row_to_call(row: sqlite3.Row) -> Call:
    return Call.from_dict(
        {
            "id": row["id"],
            "channel": row["channel_id"],
            "name": row["name"],
            "text": row["text"],
            "start": row["start_ts"],
            "end": row["end_ts"],
            "message": row["message_id"],
            "mentions": json.loads(row["mentions"]),
            "npcs": json.loads(row["npcs"]),
            "rolls": json.loads(row["rolls"]),
            "logs": json.loads(row["logs"]),
        }
    )


def _call_to_params(call: Call) -> dict:
    data = call.to_dict()
    return {
        "id": data["id"],
        "channel_id": data["channel"],
        "name": data["name"],
        "text": data["text"],
        "start_ts": data["start"],
        "end_ts": data["end"],
        "message_id": data["message"],
        "mentions": json.dumps(data["mentions"], ensure_ascii=False),
        "npcs": json.dumps(data["npcs"], ensure_ascii=False),
        "rolls": json.dumps(data["rolls"], ensure_ascii=False),
        "logs": json.dumps(data["logs"], ensure_ascii=False),
    }


class CallsRepo:
    """Async CRUD helpers for the ``calls`` table."""

    def __init__(self, conn: sqlite3.Connection, lock: asyncio.Lock):
        self.conn = conn
        self._lock = lock

    async def upsert(self, call: Call) -> int:
        """
        Insert ``call`` or update the row it was loaded from.

        :param call: Call record; ``call.id`` is ``None`` for a new call.
        :returns: Row id of the stored call.
        """
        insert_sql = """
            INSERT INTO calls (
              channel_id, name, text, start_ts, end_ts, message_id,
              mentions, npcs, rolls, logs
            ) VALUES (
              :channel_id, :name, :text, :start_ts, :end_ts, :message_id,
              :mentions, :npcs, :rolls, :logs
            )
        """
        update_sql = """
            UPDATE calls SET
              name=:name, text=:text, start_ts=:start_ts, end_ts=:end_ts,
              message_id=:message_id, mentions=:mentions, npcs=:npcs,
              rolls=:rolls, logs=:logs
            WHERE id=:id
        """
        params = _call_to_params(call)

        def _run() -> int:
            with self.conn:
                if params["id"] is None:
                    cur = self.conn.execute(insert_sql, params)
                    return int(cur.lastrowid)
                self.conn.execute(update_sql, params)
                return int(params["id"])

        async with self._lock:
            return await asyncio.to_thread(_run)  # blocking sqlite call

    async def get(self, call_id: int) -> Optional[Call]:
        """Return the call stored under ``call_id`` or ``None``."""
        sql = "SELECT * FROM calls WHERE id=?"

        def _query() -> Optional[Call]:
            row = self.conn.execute(sql, (call_id,)).fetchone()
            return _row_to_call(row) if row else None

        async with self._lock:
            return await asyncio.to_thread(_query)  # blocking sqlite call

    async def load_active(self) -> List[Call]:
        """Return every call that has not been closed."""
        sql = "SELECT * FROM calls WHERE end_ts IS NULL ORDER BY start_ts"

        def _query() -> List[Call]:
            return [_row_to_call(row) for row in self.conn.execute(sql).fetchall()]

        async with self._lock:
            return await asyncio.to_thread(_query)  # blocking sqlite call


    async def close(self) -> None:
        """Checkpoint the WAL and close the connection."""

        def _run() -> None:
            wal_checkpoint_truncate(self.conn)
            self.conn.close()

        async with self._lock:
            await asyncio.to_thread(_run)
