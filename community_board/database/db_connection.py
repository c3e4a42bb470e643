"""
PostgreSQL connection helper.
Provides get_db() for the PostgreSQL store and the schema script.
"""

import logging
import os
from typing import Optional

import psycopg2
from psycopg2.extras import DictCursor
from dotenv import load_dotenv

from community_board.errors import StoreUnavailableError

# Load .env variables from the project root
load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")

# Every store call must finish or fail within a bounded time
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", 5))
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", 5000))


def get_db(database_url: Optional[str] = None):
    """
    Returns a new psycopg2 connection with dictionary-based row access.

    Usage:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(...)

    Leaving the `with get_db()` block commits on success and rolls back on error.

    Returns:
        psycopg2.extensions.connection: A connection object with DictCursor factory.

    Raises:
        StoreUnavailableError: If no DSN is configured or the connection fails.
    """
    dsn = database_url or DATABASE_URL
    if not dsn:
        raise StoreUnavailableError("DATABASE_URL is not set")

    try:
        conn = psycopg2.connect(
            dsn,
            connect_timeout=DB_CONNECT_TIMEOUT,
            options=f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}",
        )
    except psycopg2.OperationalError as e:
        logger.error(f"[Database] Error connecting to database: {e}")
        raise StoreUnavailableError() from e

    # Rows come back as dictionaries (e.g., {"id": 1, "email": "..."})
    conn.cursor_factory = DictCursor
    return conn
