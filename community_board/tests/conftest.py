import os

# HS256 keys shorter than 32 bytes make PyJWT warn on every encode/decode
TEST_SECRET = "community-board-test-secret-0123456789"

# Ensure SESSION_SECRET is set before the auth helpers are imported
os.environ["SESSION_SECRET"] = TEST_SECRET
os.environ.pop("DATABASE_URL", None)

import pytest
from argon2 import PasswordHasher

from community_board.database.memory_store import MemoryStore
from community_board.gateway.server import create_app
from community_board.services import build_services

EVENT_FIELDS = {
    "title": "Morning Yoga",
    "date": "2025-05-14",
    "time": "7:00 AM",
    "location": "Riverside Lawn",
    "description": "Free outdoor yoga session.",
    "category": "Fitness",
}


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def services(store):
    # Cheap argon2 parameters keep the suite fast
    hasher = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)
    return build_services(store, hasher)


@pytest.fixture
def alice(services):
    return services.directory.register("Alice", "alice@example.com", "password123")


@pytest.fixture
def bob(services):
    return services.directory.register("Bob", "bob@example.com", "password123")


@pytest.fixture
def app(services):
    app = create_app(services=services)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email, password="password123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture
def alice_client(app, alice):
    client = app.test_client()
    assert login(client, "alice@example.com").status_code == 200
    return client


@pytest.fixture
def bob_client(app, bob):
    client = app.test_client()
    assert login(client, "bob@example.com").status_code == 200
    return client
