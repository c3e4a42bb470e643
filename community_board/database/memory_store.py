"""
In-process store for local development and tests.

All collections sit behind one lock so every operation, including the
event -> comments cascade, is atomic with respect to other requests.
"""

import itertools
import os
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from dotenv import load_dotenv

from community_board.database.store import Store
from community_board.errors import ConflictError, StoreUnavailableError
from community_board.models import Comment, Event, Session, User, utcnow

load_dotenv()

STORE_LOCK_TIMEOUT = float(os.getenv("STORE_LOCK_TIMEOUT", 5))


class MemoryStore(Store):
    def __init__(self, lock_timeout: float = STORE_LOCK_TIMEOUT) -> None:
        self._lock = threading.RLock()
        self._lock_timeout = lock_timeout
        self._users: Dict[int, User] = {}
        self._emails: Dict[str, int] = {}
        self._sessions: Dict[str, Session] = {}
        self._events: Dict[int, Event] = {}
        self._comments: Dict[int, Comment] = {}
        self._user_ids = itertools.count(1)
        self._event_ids = itertools.count(1)
        self._comment_ids = itertools.count(1)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise StoreUnavailableError()
        try:
            yield
        finally:
            self._lock.release()

    # --- USERS ---
    def add_user(self, name: str, email: str, password_hash: str) -> User:
        key = email.lower()
        with self._locked():
            if key in self._emails:
                raise ConflictError("Email already exists. Please use a different email.")
            user = User(id=next(self._user_ids), name=name, email=key, password_hash=password_hash)
            self._users[user.id] = user
            self._emails[key] = user.id
            return user

    def get_user(self, user_id: int) -> Optional[User]:
        with self._locked():
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._locked():
            user_id = self._emails.get(email.lower())
            return self._users.get(user_id) if user_id is not None else None

    # --- SESSIONS ---
    def add_session(self, session: Session) -> None:
        with self._locked():
            if session.token in self._sessions:
                raise ConflictError("Session token collision")
            self._sessions[session.token] = session

    def get_session(self, token: str) -> Optional[Session]:
        with self._locked():
            return self._sessions.get(token)

    def delete_session(self, token: str) -> bool:
        with self._locked():
            return self._sessions.pop(token, None) is not None

    # --- EVENTS ---
    def list_events(self) -> List[Event]:
        with self._locked():
            return [self._events[k] for k in sorted(self._events)]

    def get_event(self, event_id: int) -> Optional[Event]:
        with self._locked():
            return self._events.get(event_id)

    def add_event(self, creator_id: int, fields: Dict[str, Optional[str]]) -> Event:
        with self._locked():
            event = Event(id=next(self._event_ids), creator_id=creator_id, **fields)
            self._events[event.id] = event
            return event

    def replace_event(self, event_id: int, fields: Dict[str, Optional[str]]) -> Optional[Event]:
        with self._locked():
            current = self._events.get(event_id)
            if current is None:
                return None
            updated = current.with_fields(fields)
            self._events[event_id] = updated
            return updated

    def delete_event(self, event_id: int) -> bool:
        with self._locked():
            if event_id not in self._events:
                return False
            for comment_id in [c.id for c in self._comments.values() if c.event_id == event_id]:
                del self._comments[comment_id]
            del self._events[event_id]
            return True

    # --- COMMENTS ---
    def list_comments(self, event_id: int) -> List[Comment]:
        with self._locked():
            comments = [c for c in self._comments.values() if c.event_id == event_id]
        return sorted(comments, key=lambda c: (c.created_at, c.id))

    def get_comment(self, comment_id: int) -> Optional[Comment]:
        with self._locked():
            return self._comments.get(comment_id)

    def add_comment(self, event_id: int, user_id: int, user_name: str, text: str) -> Optional[Comment]:
        with self._locked():
            if event_id not in self._events:
                return None
            comment = Comment(
                id=next(self._comment_ids),
                event_id=event_id,
                user_id=user_id,
                user_name=user_name,
                text=text,
                created_at=utcnow(),
            )
            self._comments[comment.id] = comment
            return comment

    def update_comment_text(self, comment_id: int, text: str) -> Optional[Comment]:
        with self._locked():
            current = self._comments.get(comment_id)
            if current is None:
                return None
            updated = replace(current, text=text)
            self._comments[comment_id] = updated
            return updated

    def delete_comment(self, comment_id: int) -> bool:
        with self._locked():
            return self._comments.pop(comment_id, None) is not None
