"""
Authorization gate: one ownership policy for events and comments.

Permission:
- read / list / get: anyone, including anonymous actors.
- create: any authenticated actor.
- update / delete: only the actor whose id matches the resource owner.
"""

from typing import Any, Optional

from community_board.errors import AuthError, ForbiddenError
from community_board.models import User

READ_ACTIONS = ("read", "list", "get")
CREATE = "create"
UPDATE = "update"
DELETE = "delete"
OWNER_ACTIONS = (UPDATE, DELETE)


def owner_id(resource: Any) -> Optional[int]:
    """Owner accessor: `creator_id` for events, `user_id` for comments."""
    return getattr(resource, "owner_id", None)


def can_act(actor: Optional[User], resource: Any, action: str) -> bool:
    """
    Decide whether `actor` may perform `action` on `resource`.

    Args:
        actor (User | None): The resolved identity, or None when anonymous.
        resource: An Event or Comment (ignored for read and create).
        action (str): One of read, list, get, create, update, delete.

    Returns:
        bool: True if allowed.
    """
    if action in READ_ACTIONS:
        return True
    if actor is None:
        return False
    if action == CREATE:
        return True
    if action in OWNER_ACTIONS:
        return resource is not None and owner_id(resource) == actor.id
    return False


def authorize(actor: Optional[User], resource: Any, action: str, message: str = "") -> User:
    """
    Raise unless `can_act` allows the triple.

    Anonymous actors get AuthError; authenticated non-owners get ForbiddenError.
    Returns the actor so callers can continue with a non-optional User.
    """
    if can_act(actor, resource, action):
        return actor
    if actor is None:
        raise AuthError()
    raise ForbiddenError(message)


def require_actor(actor: Optional[User]) -> User:
    """Shortcut for operations that only need an authenticated actor."""
    if actor is None:
        raise AuthError()
    return actor
