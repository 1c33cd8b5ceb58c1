from __future__ import annotations

"""Dataclass models for roll calls.

Serialized call schema (output of :meth:`Call.to_dict`):

```
{"id": 7, "channel": 1234, "name": "Initiative!", "text": "Goblins attack",
 "start": 1718000000.0, "end": null, "message": 5678,
 "mentions": [{"id": 42, "name": "Al"}],
 "npcs": ["Goblins"],
 "rolls": [{"name": "Al", "roll": 15}],
 "logs": ["Al rolled 15"]}
```

Timestamps are unix seconds (UTC). ``id`` is the storage identity and stays
``None`` until the call is first persisted.
"""

import copy
import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _to_ts(value: Optional[datetime.datetime]) -> Optional[float]:
    return value.timestamp() if value is not None else None


def _from_ts(value: Optional[float]) -> Optional[datetime.datetime]:
    if value is None:
        return None
    return datetime.datetime.fromtimestamp(float(value), tz=datetime.timezone.utc)


@dataclass(slots=True, frozen=True)
class Mention:
    """A participant pulled from user or role mentions. ``id`` is the dedup key."""

    id: int
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mention":
        return cls(id=int(data["id"]), name=str(data.get("name", "")))


@dataclass(slots=True, frozen=True)
class Roll:
    name: str
    roll: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "roll": self.roll}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Roll":
        return cls(name=str(data["name"]), roll=int(data["roll"]))


@dataclass(slots=True)
class Call:
    """One roll-call session scoped to a single channel."""

    channel: int
    name: str = ""
    text: str = ""
    start: datetime.datetime = field(default_factory=utcnow)
    end: Optional[datetime.datetime] = None
    mentions: List[Mention] = field(default_factory=list)
    npcs: List[str] = field(default_factory=list)
    rolls: List[Roll] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    message: Optional[int] = None
    id: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.end is None

    def standings(self) -> List[Roll]:
        """
        Return rolls ordered by value, highest first.

        ``sorted`` is stable, so equal rolls keep their insertion order. The
        stored ``rolls`` list is left untouched.
        """
        return sorted(self.rolls, key=lambda r: -r.roll)

    def snapshot(self) -> "Call":
        """Return a deep copy safe to hand to callers across await points."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "channel": self.channel,
            "name": self.name,
            "text": self.text,
            "start": _to_ts(self.start),
            "end": _to_ts(self.end),
            "message": self.message,
            "mentions": [m.to_dict() for m in self.mentions],
            "npcs": list(self.npcs),
            "rolls": [r.to_dict() for r in self.rolls],
            "logs": list(self.logs),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Call":
        message = data.get("message")
        return cls(
            id=data.get("id"),
            channel=int(data["channel"]),
            name=data.get("name") or "",
            text=data.get("text") or "",
            start=_from_ts(data.get("start")) or utcnow(),
            end=_from_ts(data.get("end")),
            message=int(message) if message is not None else None,
            mentions=[Mention.from_dict(m) for m in data.get("mentions") or []],
            npcs=[str(n) for n in data.get("npcs") or []],
            rolls=[Roll.from_dict(r) for r in data.get("rolls") or []],
            logs=[str(line) for line in data.get("logs") or []],
        )


@dataclass(slots=True)
class CallResults:
    """A closed call plus its rolls sorted for display."""

    call: Call
    standings: List[Roll]
