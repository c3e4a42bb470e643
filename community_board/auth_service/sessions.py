"""
Session store: maps an opaque client token to an authenticated user.

The server keeps one record per session keyed by a random id. The client
receives that id wrapped in a signed token, so a forged or tampered token
never reaches the store, and logout deletes the record to revoke the token.
"""

import logging
import secrets
from typing import Callable, Optional

from community_board.auth_service.utils import create_token, decode_token, session_lifetime
from community_board.database.store import Store
from community_board.models import Session, User, utcnow

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, store: Store, user_lookup: Callable[[int], Optional[User]]) -> None:
        self.store = store
        self.user_lookup = user_lookup

    def create_session(self, user_id: int) -> str:
        """
        Open a new session for `user_id`.

        Returns:
            str: The token to hand to the client.
        """
        now = utcnow()
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + session_lifetime(),
        )
        self.store.add_session(session)
        logger.info(f"[Sessions] Session opened for user {user_id}")
        return create_token(session.token, user_id, session.created_at, session.expires_at)

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """Return the bound user, or None for unknown, invalid or expired tokens."""
        session = self._lookup(token)
        if session is None:
            return None
        if session.is_expired():
            self.store.delete_session(session.token)
            return None
        return self.user_lookup(session.user_id)

    def destroy(self, token: Optional[str]) -> None:
        """Close the session behind `token`. Unknown tokens are ignored."""
        payload = decode_token(token, verify_exp=False) if token else None
        if payload and payload.get("sid"):
            if self.store.delete_session(payload["sid"]):
                logger.info(f"[Sessions] Session closed for user {payload.get('sub')}")

    def _lookup(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        payload = decode_token(token)
        if not payload or not payload.get("sid"):
            return None
        session = self.store.get_session(payload["sid"])
        if session is None or str(session.user_id) != str(payload.get("sub")):
            return None
        return session
