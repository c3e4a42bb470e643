"""
Storage interface shared by the PostgreSQL and in-memory backends.

Domain services only talk to a `Store`. Each method is atomic on its own:
`replace_event` swaps every mutable field in one step, and `delete_event`
removes the event together with its comments.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from dotenv import load_dotenv

from community_board.models import Comment, Event, Session, User

load_dotenv()

logger = logging.getLogger(__name__)


class Store(ABC):
    # --- USERS ---
    @abstractmethod
    def add_user(self, name: str, email: str, password_hash: str) -> User:
        """Insert a user. Raises ConflictError if the email is taken."""

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    # --- SESSIONS ---
    @abstractmethod
    def add_session(self, session: Session) -> None: ...

    @abstractmethod
    def get_session(self, token: str) -> Optional[Session]: ...

    @abstractmethod
    def delete_session(self, token: str) -> bool: ...

    # --- EVENTS ---
    @abstractmethod
    def list_events(self) -> List[Event]:
        """All events ordered by id."""

    @abstractmethod
    def get_event(self, event_id: int) -> Optional[Event]: ...

    @abstractmethod
    def add_event(self, creator_id: int, fields: Dict[str, Optional[str]]) -> Event: ...

    @abstractmethod
    def replace_event(self, event_id: int, fields: Dict[str, Optional[str]]) -> Optional[Event]:
        """Replace all mutable fields at once. None if the event is gone."""

    @abstractmethod
    def delete_event(self, event_id: int) -> bool:
        """Delete the event and its comments together. False if absent."""

    # --- COMMENTS ---
    @abstractmethod
    def list_comments(self, event_id: int) -> List[Comment]:
        """Comments of one event, oldest first."""

    @abstractmethod
    def get_comment(self, comment_id: int) -> Optional[Comment]: ...

    @abstractmethod
    def add_comment(self, event_id: int, user_id: int, user_name: str, text: str) -> Optional[Comment]:
        """Insert a comment. None if the event does not exist."""

    @abstractmethod
    def update_comment_text(self, comment_id: int, text: str) -> Optional[Comment]: ...

    @abstractmethod
    def delete_comment(self, comment_id: int) -> bool: ...


def create_store(database_url: Optional[str] = None) -> Store:
    """
    Build the store selected by configuration.

    DATABASE_URL set -> PostgresStore; unset -> MemoryStore (local development only,
    nothing survives a restart).
    """
    database_url = database_url if database_url is not None else os.getenv("DATABASE_URL")

    if database_url:
        from community_board.database.postgres_store import PostgresStore

        logger.info("[Store] Using PostgreSQL store")
        return PostgresStore(database_url)

    from community_board.database.memory_store import MemoryStore

    logger.warning("[Store] DATABASE_URL is not set; using in-memory store (data is not persisted)")
    return MemoryStore()
