"""
Database setup script.

Creates the community board tables and, with --seed, loads a few sample
users and events so a fresh install has something to browse.

Usage:
    python -m community_board.database.init_db [--seed]
"""

import logging
import sys
from typing import List

from community_board.database.db_connection import get_db
from community_board.database.schema import create_schema, missing_tables
from community_board.database.store import Store, create_store
from community_board.errors import CommunityBoardError
from community_board.services import build_services

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS = [
    {"name": "John Doe", "email": "john@example.com"},
    {"name": "Jane Smith", "email": "jane@example.com"},
    {"name": "Bob Johnson", "email": "bob@example.com"},
]

# (creator index into SAMPLE_USERS, event fields)
SAMPLE_EVENTS = [
    (0, {
        "title": "Neighborhood Cleanup",
        "description": "Join us for a community cleanup day!",
        "date": "2025-05-12",
        "time": "10:00 AM",
        "location": "City Park",
        "category": "Community",
    }),
    (1, {
        "title": "Farmers Market",
        "description": "Local vendors, produce, and crafts!",
        "date": "2025-05-13",
        "time": "8:00 AM",
        "location": "Main Street",
        "category": "Market",
    }),
    (2, {
        "title": "Morning Yoga",
        "description": "Free outdoor yoga session for all levels.",
        "date": "2025-05-14",
        "time": "7:00 AM",
        "location": "Riverside Lawn",
        "category": "Fitness",
    }),
    (1, {
        "title": "Mural Painting Workshop",
        "description": "Help paint the new mural at the community center.",
        "date": "2025-05-15",
        "time": "2:00 PM",
        "location": "Community Center",
        "category": "Art",
    }),
]


def seed_sample_data(store: Store) -> List[int]:
    """
    Register the sample users and create their events.

    Safe to re-run: sample users that already exist are reused and events
    their creator already has (by title) are not created again.

    Returns:
        list: IDs of the created events.
    """
    services = build_services(store)
    users = []
    created_users = 0
    for sample in SAMPLE_USERS:
        user = store.get_user_by_email(sample["email"])
        if user is None:
            user = services.directory.register(sample["name"], sample["email"], SAMPLE_PASSWORD)
            created_users += 1
        users.append(user)

    existing = {(event.creator_id, event.title) for event in services.catalog.list()}
    event_ids = []
    for creator_index, fields in SAMPLE_EVENTS:
        creator = users[creator_index]
        if (creator.id, fields["title"]) in existing:
            continue
        event = services.catalog.create(creator, fields)
        event_ids.append(event.id)
    logger.info(f"[Seed] Created {created_users} users and {len(event_ids)} events")
    return event_ids


def main(argv: List[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(asctime)s - %(message)s")

    try:
        conn = get_db()
    except CommunityBoardError as e:
        logger.error(f"Could not connect to the database: {e.message}")
        return 1

    try:
        create_schema(conn)
        missing = missing_tables(conn)
        if missing:
            logger.error(f"Tables still missing after setup: {', '.join(missing)}")
            return 1
    finally:
        conn.close()

    if "--seed" in argv:
        seed_sample_data(create_store())

    logger.info("Database is ready.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
