"""
Comments service routes: read, post, edit and delete comments on events.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, Response, jsonify

from community_board.auth_service.utils import current_actor
from community_board.gateway.helpers import add_request_logging, json_body
from community_board.services import get_services

comments_bp = Blueprint("comments", __name__)

# --- REQUEST LOGGING ---
add_request_logging(comments_bp, "Comments")


@comments_bp.route("/events/<int:event_id>/comments", methods=["GET"])
def list_comments(event_id: int) -> Tuple[Response, int]:
    """
    Get all comments for an event, oldest first. Public.

    Returns:
        200: { "comments": [Comment, ...], "count": int }
        404: Event not found.
    """
    comments = get_services().ledger.list(event_id)
    return jsonify({"comments": [c.to_dict() for c in comments], "count": len(comments)}), 200


@comments_bp.route("/events/<int:event_id>/comments", methods=["POST"])
def add_comment(event_id: int) -> Tuple[Response, int]:
    """
    Post a comment on an event. Expects { "text": str }.

    Returns:
        201: The created Comment.
        400: Empty text.
        401: Not logged in.
        404: Event not found.
    """
    data: Dict[str, Any] = json_body()
    comment = get_services().ledger.add(current_actor(), event_id, data.get("text"))
    return jsonify(comment.to_dict()), 201


@comments_bp.route("/comments/<int:comment_id>", methods=["PUT"])
def edit_comment(comment_id: int) -> Tuple[Response, int]:
    """
    Edit a comment's text. Only its author may do this.

    Returns:
        200: The updated Comment.
        400: Empty text.
        401/403/404: Not logged in, not the author, no such comment.
    """
    data: Dict[str, Any] = json_body()
    comment = get_services().ledger.edit(current_actor(), comment_id, data.get("text"))
    return jsonify(comment.to_dict()), 200


@comments_bp.route("/comments/<int:comment_id>", methods=["DELETE"])
def delete_comment(comment_id: int) -> Tuple[Response, int]:
    """
    Delete a comment. Only its author may do this.
    """
    get_services().ledger.delete(current_actor(), comment_id)
    return jsonify({"success": True, "message": "Comment deleted successfully"}), 200
