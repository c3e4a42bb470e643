"""
Database schema for the community board.

Comments reference events without ON DELETE CASCADE: the store deletes an
event's comments itself, in the same transaction as the event.
"""

import logging

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255) NOT NULL,
        password_hash VARCHAR(255) NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );
    CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email_lower ON users (LOWER(email));

    CREATE TABLE IF NOT EXISTS sessions (
        token VARCHAR(128) PRIMARY KEY,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
        expires_at TIMESTAMPTZ NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_sessions_user_id ON sessions (user_id);

    CREATE TABLE IF NOT EXISTS events (
        id SERIAL PRIMARY KEY,
        creator_id INTEGER NOT NULL REFERENCES users(id),
        title VARCHAR(255) NOT NULL,
        date VARCHAR(50) NOT NULL,
        time VARCHAR(50) NOT NULL,
        location VARCHAR(255) NOT NULL,
        description TEXT NOT NULL,
        category VARCHAR(100),
        organizer VARCHAR(255)
    );
    CREATE INDEX IF NOT EXISTS idx_events_creator_id ON events (creator_id);
    CREATE INDEX IF NOT EXISTS idx_events_category ON events (category);
    CREATE INDEX IF NOT EXISTS idx_events_date ON events (date);

    CREATE TABLE IF NOT EXISTS comments (
        id SERIAL PRIMARY KEY,
        event_id INTEGER NOT NULL REFERENCES events(id),
        user_id INTEGER NOT NULL REFERENCES users(id),
        user_name VARCHAR(255) NOT NULL,
        text TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );
    CREATE INDEX IF NOT EXISTS idx_comments_event_id ON comments (event_id);
    CREATE INDEX IF NOT EXISTS idx_comments_user_id ON comments (user_id);
"""

TABLES = ("users", "sessions", "events", "comments")


def create_schema(conn) -> None:
    """Create all tables and indexes if they do not exist yet."""
    with conn.cursor() as cur:
        cur.execute(SCHEMA_SQL)
    conn.commit()
    logger.info("[Database] Schema is up to date")


def missing_tables(conn) -> list:
    """Names of the tables from TABLES that are not present in the database."""
    missing = []
    with conn.cursor() as cur:
        for table in TABLES:
            cur.execute("SELECT to_regclass(%s);", (table,))
            if cur.fetchone()[0] is None:
                missing.append(table)
    return missing
