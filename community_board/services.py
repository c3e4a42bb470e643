"""
Wires the domain components around one store.

The gateway builds a `Services` per app and keeps it in
`app.extensions["community_board"]`; route handlers read it from there.
"""

from dataclasses import dataclass
from typing import Optional

from argon2 import PasswordHasher
from flask import current_app

from community_board.auth_service.directory import UserDirectory
from community_board.auth_service.sessions import SessionStore
from community_board.comments_service.ledger import CommentLedger
from community_board.database.store import Store
from community_board.events_service.catalog import EventCatalog
from community_board.events_service.search import SearchEngine


@dataclass
class Services:
    store: Store
    directory: UserDirectory
    sessions: SessionStore
    catalog: EventCatalog
    ledger: CommentLedger
    search: SearchEngine


def build_services(store: Store, hasher: Optional[PasswordHasher] = None) -> Services:
    directory = UserDirectory(store, hasher)
    catalog = EventCatalog(store)
    return Services(
        store=store,
        directory=directory,
        sessions=SessionStore(store, directory.get),
        catalog=catalog,
        ledger=CommentLedger(store),
        search=SearchEngine(catalog),
    )


def get_services() -> Services:
    return current_app.extensions["community_board"]
