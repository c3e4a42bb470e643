"""
Event catalog: owns the event collection.

Handles event lifecycle and ownership:
- Anyone may list and read events.
- Any logged-in user may create one; they become its creator.
- Only the creator may update or delete it; deleting removes its comments too.
"""

import logging
from typing import Any, Dict, List, Optional

from community_board.authorization import CREATE, DELETE, UPDATE, authorize, require_actor
from community_board.database.store import Store
from community_board.errors import NotFoundError, ValidationError
from community_board.models import CATEGORIES, MUTABLE_EVENT_FIELDS, REQUIRED_EVENT_FIELDS, Event, User

logger = logging.getLogger(__name__)


def _clean(name: str, value: Any) -> Optional[str]:
    """Trim strings; blank becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Event {name} must be a string")
    return value.strip() or None


def validate_event_fields(fields: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """
    Normalise and validate a full set of mutable event fields.

    Returns:
        dict: Every mutable field, trimmed, optional blanks as None.

    Raises:
        ValidationError: Naming the first missing or non-string field, or an unknown category.
    """
    cleaned = {name: _clean(name, fields.get(name)) for name in MUTABLE_EVENT_FIELDS}

    for name in REQUIRED_EVENT_FIELDS:
        if not cleaned[name]:
            raise ValidationError(f"Event {name} is required")

    category = cleaned["category"]
    if category is not None and category not in CATEGORIES:
        raise ValidationError(f"category must be one of: {', '.join(CATEGORIES)}")

    return cleaned


class EventCatalog:
    def __init__(self, store: Store) -> None:
        self.store = store

    def list(self) -> List[Event]:
        """All events, ordered by id."""
        return self.store.list_events()

    def get(self, event_id: int) -> Event:
        event = self.store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def create(self, actor: Optional[User], fields: Dict[str, Any]) -> Event:
        actor = authorize(actor, None, CREATE)
        cleaned = validate_event_fields(fields)
        if not cleaned["organizer"]:
            cleaned["organizer"] = actor.name

        event = self.store.add_event(actor.id, cleaned)
        logger.info(f"[Catalog] User {actor.id} created event {event.id}")
        return event

    def update(self, actor: Optional[User], event_id: int, fields: Dict[str, Any]) -> Event:
        """
        Replace an event's mutable fields.

        Fields missing from `fields` keep their stored value; `id` and `creatorId`
        are ignored. Ownership is checked before the fields are validated.
        """
        event = self._owned(actor, event_id, UPDATE, "You can only edit your own events")

        merged = event.mutable_fields()
        merged.update({k: v for k, v in fields.items() if k in MUTABLE_EVENT_FIELDS})
        cleaned = validate_event_fields(merged)

        updated = self.store.replace_event(event_id, cleaned)
        if updated is None:
            raise NotFoundError("Event not found")
        logger.info(f"[Catalog] User {actor.id} updated event {event_id}")
        return updated

    def delete(self, actor: Optional[User], event_id: int) -> None:
        """Delete an event and, in the same transaction, all of its comments."""
        self._owned(actor, event_id, DELETE, "You can only delete your own events")

        if not self.store.delete_event(event_id):
            raise NotFoundError("Event not found or already deleted")
        logger.info(f"[Catalog] User {actor.id} deleted event {event_id}")

    def _owned(self, actor: Optional[User], event_id: int, action: str, message: str) -> Event:
        # Anonymous callers get 401 before we reveal whether the event exists
        require_actor(actor)
        event = self.get(event_id)
        authorize(actor, event, action, message)
        return event
