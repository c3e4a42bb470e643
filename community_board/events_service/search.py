"""
Event search: keyword and field filters over the catalog.

Filters are ANDed; a missing or blank filter matches everything.
- keyword: case-insensitive substring of title, category or organizer
- category: exact, case-sensitive
- date: exact
- location: case-insensitive substring
"""

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional

from community_board.events_service.catalog import EventCatalog
from community_board.models import Event

KEYWORD_FIELDS = ("title", "category", "organizer")


@dataclass(frozen=True)
class SearchQuery:
    keyword: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "SearchQuery":
        """Build a query from request args; blank values are treated as absent."""
        values = {}
        for f in fields(cls):
            raw = params.get(f.name)
            value = raw.strip() if isinstance(raw, str) else raw
            values[f.name] = value or None
        return cls(**values)

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def matches(event: Event, query: SearchQuery) -> bool:
    if query.keyword and not any(_contains(getattr(event, name), query.keyword) for name in KEYWORD_FIELDS):
        return False
    if query.category and event.category != query.category:
        return False
    if query.date and event.date != query.date:
        return False
    if query.location and not _contains(event.location, query.location):
        return False
    return True


class SearchEngine:
    def __init__(self, catalog: EventCatalog) -> None:
        self.catalog = catalog

    def search(self, query: SearchQuery) -> List[Event]:
        """Events matching `query`, in catalog order. Read-only."""
        events = self.catalog.list()
        if query.is_empty():
            return events
        return [event for event in events if matches(event, query)]
