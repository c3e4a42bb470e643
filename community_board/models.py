"""
Domain records for users, sessions, events and comments.

Records are plain dataclasses. `to_dict()` produces the camelCase JSON shape
the frontend consumes; password hashes never leave the User record.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

# Fixed category set offered by the event form and the search filters.
CATEGORIES: Tuple[str, ...] = ("Community", "Market", "Fitness", "Art")

# Event fields that must be non-empty after trimming, in validation order.
REQUIRED_EVENT_FIELDS: Tuple[str, ...] = ("title", "date", "time", "location", "description")
OPTIONAL_EVENT_FIELDS: Tuple[str, ...] = ("category", "organizer")
MUTABLE_EVENT_FIELDS: Tuple[str, ...] = REQUIRED_EVENT_FIELDS + OPTIONAL_EVENT_FIELDS


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    password_hash: str = field(repr=False, default="")
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class Session:
    token: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at


@dataclass(frozen=True)
class Event:
    id: int
    creator_id: int
    title: str
    date: str
    time: str
    location: str
    description: str
    category: Optional[str] = None
    organizer: Optional[str] = None

    @property
    def owner_id(self) -> int:
        return self.creator_id

    def mutable_fields(self) -> Dict[str, Optional[str]]:
        return {name: getattr(self, name) for name in MUTABLE_EVENT_FIELDS}

    def with_fields(self, fields: Dict[str, Optional[str]]) -> "Event":
        """Return a copy with the given mutable fields replaced."""
        return replace(self, **{k: v for k, v in fields.items() if k in MUTABLE_EVENT_FIELDS})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "time": self.time,
            "location": self.location,
            "category": self.category,
            "organizer": self.organizer,
            "creatorId": self.creator_id,
        }


@dataclass(frozen=True)
class Comment:
    id: int
    event_id: int
    user_id: int
    text: str
    user_name: str = ""
    created_at: datetime = field(default_factory=utcnow)

    @property
    def owner_id(self) -> int:
        return self.user_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "eventId": self.event_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "text": self.text,
            "createdAt": _iso(self.created_at),
        }
