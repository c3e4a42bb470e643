from dataclasses import replace
from datetime import timedelta

import pytest

from community_board.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from conftest import EVENT_FIELDS


@pytest.fixture
def event(services, alice):
    return services.catalog.create(alice, EVENT_FIELDS)


def test_list_empty(services, event):
    assert services.ledger.list(event.id) == []


def test_list_missing_event(services):
    with pytest.raises(NotFoundError):
        services.ledger.list(321)


def test_add_comment(services, event, bob):
    comment = services.ledger.add(bob, event.id, "  Looking forward to it  ")

    assert comment.event_id == event.id
    assert comment.user_id == bob.id
    assert comment.user_name == "Bob"
    assert comment.text == "Looking forward to it"
    assert services.ledger.list(event.id) == [comment]


def test_add_requires_login(services, event):
    with pytest.raises(AuthError):
        services.ledger.add(None, event.id, "hi")


def test_add_to_missing_event(services, bob):
    with pytest.raises(NotFoundError):
        services.ledger.add(bob, 999, "hi")


@pytest.mark.parametrize("text", ["", "   ", None])
def test_add_blank_text(services, event, bob, text):
    with pytest.raises(ValidationError):
        services.ledger.add(bob, event.id, text)


def test_list_oldest_first(services, store, event, alice, bob):
    first = services.ledger.add(bob, event.id, "first")
    second = services.ledger.add(alice, event.id, "second")
    third = services.ledger.add(bob, event.id, "third")

    # Same timestamp falls back to id order
    store._comments[third.id] = replace(third, created_at=first.created_at)
    store._comments[second.id] = replace(second, created_at=first.created_at + timedelta(seconds=5))

    assert [c.text for c in services.ledger.list(event.id)] == ["first", "third", "second"]


def test_edit_by_author(services, event, bob):
    comment = services.ledger.add(bob, event.id, "typo")
    edited = services.ledger.edit(bob, comment.id, "fixed")

    assert edited.id == comment.id
    assert edited.text == "fixed"
    assert edited.created_at == comment.created_at


def test_edit_blank_text_leaves_comment_unchanged(services, event, bob):
    comment = services.ledger.add(bob, event.id, "original")

    with pytest.raises(ValidationError):
        services.ledger.edit(bob, comment.id, "   ")

    assert services.ledger.get(comment.id).text == "original"


def test_edit_by_other_user_is_forbidden(services, event, alice, bob):
    comment = services.ledger.add(bob, event.id, "mine")

    with pytest.raises(ForbiddenError):
        services.ledger.edit(alice, comment.id, "not yours")
    assert services.ledger.get(comment.id).text == "mine"


def test_edit_missing_comment(services, bob):
    with pytest.raises(NotFoundError):
        services.ledger.edit(bob, 77, "text")


def test_edit_anonymous(services, event, bob):
    comment = services.ledger.add(bob, event.id, "mine")
    with pytest.raises(AuthError):
        services.ledger.edit(None, comment.id, "x")


def test_event_owner_cannot_delete_others_comment(services, event, alice, bob):
    """U1 creates E1, U2 comments, U1 cannot delete it, U2 can."""
    comment = services.ledger.add(bob, event.id, "C1")

    with pytest.raises(ForbiddenError):
        services.ledger.delete(alice, comment.id)

    services.ledger.delete(bob, comment.id)
    assert services.ledger.list(event.id) == []


def test_delete_missing_comment(services, bob):
    with pytest.raises(NotFoundError):
        services.ledger.delete(bob, 404)
