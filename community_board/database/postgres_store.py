"""
PostgreSQL-backed store.

Each public method runs in its own transaction: it either commits as a whole
or rolls back, so a failed or abandoned request never leaves partial writes.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import psycopg2
import psycopg2.errors

from community_board.database.db_connection import get_db
from community_board.database.store import Store
from community_board.errors import ConflictError, StoreError, StoreUnavailableError
from community_board.models import MUTABLE_EVENT_FIELDS, Comment, Event, Session, User

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, name, email, password_hash, created_at"
EVENT_COLUMNS = "id, creator_id, title, date, time, location, description, category, organizer"
COMMENT_COLUMNS = "id, event_id, user_id, user_name, text, created_at"


def _user(row: Any) -> User:
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )


def _event(row: Any) -> Event:
    return Event(
        id=row["id"],
        creator_id=row["creator_id"],
        title=row["title"],
        date=row["date"],
        time=row["time"],
        location=row["location"],
        description=row["description"],
        category=row["category"],
        organizer=row["organizer"],
    )


def _comment(row: Any) -> Comment:
    return Comment(
        id=row["id"],
        event_id=row["event_id"],
        user_id=row["user_id"],
        user_name=row["user_name"],
        text=row["text"],
        created_at=row["created_at"],
    )


class PostgresStore(Store):
    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url

    @contextmanager
    def _transaction(self) -> Iterator[Any]:
        """
        Yield a cursor inside one transaction.

        Connection and timeout failures surface as StoreUnavailableError (retryable);
        other database failures as StoreError. Domain errors pass through after rollback.
        """
        conn = get_db(self.database_url)
        try:
            with conn.cursor() as cur:
                yield cur
            conn.commit()
        except (psycopg2.OperationalError, psycopg2.errors.QueryCanceled) as e:
            conn.rollback()
            logger.error(f"[Store] Database unavailable: {e}")
            raise StoreUnavailableError() from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"[Store] Database error: {e}")
            raise StoreError() from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # --- USERS ---
    def add_user(self, name: str, email: str, password_hash: str) -> User:
        sql = f"""
            INSERT INTO users (name, email, password_hash)
            VALUES (%s, %s, %s)
            RETURNING {USER_COLUMNS};
        """
        try:
            with self._transaction() as cur:
                cur.execute(sql, (name, email.lower(), password_hash))
                return _user(cur.fetchone())
        except StoreError as e:
            if isinstance(e.__cause__, psycopg2.errors.UniqueViolation):
                raise ConflictError("Email already exists. Please use a different email.") from e
            raise

    def get_user(self, user_id: int) -> Optional[User]:
        with self._transaction() as cur:
            cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = %s;", (user_id,))
            row = cur.fetchone()
        return _user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._transaction() as cur:
            cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE LOWER(email) = %s;", (email.lower(),))
            row = cur.fetchone()
        return _user(row) if row else None

    # --- SESSIONS ---
    def add_session(self, session: Session) -> None:
        sql = """
            INSERT INTO sessions (token, user_id, created_at, expires_at)
            VALUES (%s, %s, %s, %s);
        """
        try:
            with self._transaction() as cur:
                cur.execute(sql, (session.token, session.user_id, session.created_at, session.expires_at))
        except StoreError as e:
            if isinstance(e.__cause__, psycopg2.errors.UniqueViolation):
                raise ConflictError("Session token collision") from e
            raise

    def get_session(self, token: str) -> Optional[Session]:
        with self._transaction() as cur:
            cur.execute(
                "SELECT token, user_id, created_at, expires_at FROM sessions WHERE token = %s;",
                (token,),
            )
            row = cur.fetchone()
        if not row:
            return None
        return Session(
            token=row["token"],
            user_id=row["user_id"],
            created_at=row["created_at"],
            expires_at=row["expires_at"],
        )

    def delete_session(self, token: str) -> bool:
        with self._transaction() as cur:
            cur.execute("DELETE FROM sessions WHERE token = %s;", (token,))
            return cur.rowcount > 0

    # --- EVENTS ---
    def list_events(self) -> List[Event]:
        with self._transaction() as cur:
            cur.execute(f"SELECT {EVENT_COLUMNS} FROM events ORDER BY id;")
            return [_event(row) for row in cur.fetchall()]

    def get_event(self, event_id: int) -> Optional[Event]:
        with self._transaction() as cur:
            cur.execute(f"SELECT {EVENT_COLUMNS} FROM events WHERE id = %s;", (event_id,))
            row = cur.fetchone()
        return _event(row) if row else None

    def add_event(self, creator_id: int, fields: Dict[str, Optional[str]]) -> Event:
        columns = ", ".join(MUTABLE_EVENT_FIELDS)
        placeholders = ", ".join(["%s"] * (len(MUTABLE_EVENT_FIELDS) + 1))
        sql = f"""
            INSERT INTO events (creator_id, {columns})
            VALUES ({placeholders})
            RETURNING {EVENT_COLUMNS};
        """
        values = [creator_id] + [fields.get(name) for name in MUTABLE_EVENT_FIELDS]
        with self._transaction() as cur:
            cur.execute(sql, values)
            return _event(cur.fetchone())

    def replace_event(self, event_id: int, fields: Dict[str, Optional[str]]) -> Optional[Event]:
        # One UPDATE statement: concurrent updates never interleave field by field
        set_clause = ", ".join(f"{name} = %s" for name in MUTABLE_EVENT_FIELDS)
        sql = f"UPDATE events SET {set_clause} WHERE id = %s RETURNING {EVENT_COLUMNS};"
        values = [fields.get(name) for name in MUTABLE_EVENT_FIELDS] + [event_id]
        with self._transaction() as cur:
            cur.execute(sql, values)
            row = cur.fetchone()
        return _event(row) if row else None

    def delete_event(self, event_id: int) -> bool:
        with self._transaction() as cur:
            # Lock the event row first so no comment can be added to it mid-delete
            cur.execute("SELECT id FROM events WHERE id = %s FOR UPDATE;", (event_id,))
            if not cur.fetchone():
                return False
            cur.execute("DELETE FROM comments WHERE event_id = %s;", (event_id,))
            cur.execute("DELETE FROM events WHERE id = %s;", (event_id,))
            return cur.rowcount > 0

    # --- COMMENTS ---
    def list_comments(self, event_id: int) -> List[Comment]:
        with self._transaction() as cur:
            cur.execute(
                f"SELECT {COMMENT_COLUMNS} FROM comments WHERE event_id = %s ORDER BY created_at, id;",
                (event_id,),
            )
            return [_comment(row) for row in cur.fetchall()]

    def get_comment(self, comment_id: int) -> Optional[Comment]:
        with self._transaction() as cur:
            cur.execute(f"SELECT {COMMENT_COLUMNS} FROM comments WHERE id = %s;", (comment_id,))
            row = cur.fetchone()
        return _comment(row) if row else None

    def add_comment(self, event_id: int, user_id: int, user_name: str, text: str) -> Optional[Comment]:
        with self._transaction() as cur:
            cur.execute("SELECT id FROM events WHERE id = %s FOR SHARE;", (event_id,))
            if not cur.fetchone():
                return None
            cur.execute(
                f"""
                INSERT INTO comments (event_id, user_id, user_name, text)
                VALUES (%s, %s, %s, %s)
                RETURNING {COMMENT_COLUMNS};
                """,
                (event_id, user_id, user_name, text),
            )
            return _comment(cur.fetchone())

    def update_comment_text(self, comment_id: int, text: str) -> Optional[Comment]:
        with self._transaction() as cur:
            cur.execute(
                f"UPDATE comments SET text = %s WHERE id = %s RETURNING {COMMENT_COLUMNS};",
                (text, comment_id),
            )
            row = cur.fetchone()
        return _comment(row) if row else None

    def delete_comment(self, comment_id: int) -> bool:
        with self._transaction() as cur:
            cur.execute("DELETE FROM comments WHERE id = %s;", (comment_id,))
            return cur.rowcount > 0
