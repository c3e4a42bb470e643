"""
Comment ledger: comments scoped to one event.

Anyone may read an event's comments. Logged-in users may post; only a
comment's author may edit or delete it.
"""

import logging
from typing import List, Optional

from community_board.authorization import DELETE, UPDATE, authorize, require_actor
from community_board.database.store import Store
from community_board.errors import NotFoundError, ValidationError
from community_board.models import Comment, User

logger = logging.getLogger(__name__)


def _clean_text(text: Optional[str]) -> str:
    text = text.strip() if isinstance(text, str) else ""
    if not text:
        raise ValidationError("Comment text is required")
    return text


class CommentLedger:
    def __init__(self, store: Store) -> None:
        self.store = store

    def list(self, event_id: int) -> List[Comment]:
        """Comments for `event_id`, oldest first."""
        if self.store.get_event(event_id) is None:
            raise NotFoundError("Event not found")
        return self.store.list_comments(event_id)

    def get(self, comment_id: int) -> Comment:
        comment = self.store.get_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def add(self, actor: Optional[User], event_id: int, text: Optional[str]) -> Comment:
        actor = require_actor(actor)
        if self.store.get_event(event_id) is None:
            raise NotFoundError("Event not found")
        text = _clean_text(text)

        comment = self.store.add_comment(event_id, actor.id, actor.name, text)
        if comment is None:
            # Event deleted between the check and the insert
            raise NotFoundError("Event not found")
        logger.info(f"[Ledger] User {actor.id} commented {comment.id} on event {event_id}")
        return comment

    def edit(self, actor: Optional[User], comment_id: int, text: Optional[str]) -> Comment:
        actor = require_actor(actor)
        comment = self.get(comment_id)
        authorize(actor, comment, UPDATE, "You can only edit your own comments")
        text = _clean_text(text)

        updated = self.store.update_comment_text(comment_id, text)
        if updated is None:
            raise NotFoundError("Comment not found")
        logger.info(f"[Ledger] User {actor.id} edited comment {comment_id}")
        return updated

    def delete(self, actor: Optional[User], comment_id: int) -> None:
        actor = require_actor(actor)
        comment = self.get(comment_id)
        authorize(actor, comment, DELETE, "You can only delete your own comments")

        if not self.store.delete_comment(comment_id):
            raise NotFoundError("Comment not found")
        logger.info(f"[Ledger] User {actor.id} deleted comment {comment_id}")
