"""
Events service routes: list, search, create, read, update and delete events.
Handles event lifecycle management; ownership rules live in the catalog.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, Response, jsonify, request

from community_board.auth_service.utils import current_actor
from community_board.events_service.search import SearchQuery
from community_board.gateway.helpers import add_request_logging, json_body
from community_board.models import CATEGORIES
from community_board.services import get_services

events_bp = Blueprint("events", __name__)

SEARCH_FILTERS = ["category", "date", "location", "keyword"]

# --- REQUEST LOGGING ---
add_request_logging(events_bp, "Events")


@events_bp.route("", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """
    Return all events, ordered by id. Public.

    Returns:
        200: { "events": [Event, ...] }
    """
    events = get_services().catalog.list()
    return jsonify({"events": [e.to_dict() for e in events]}), 200


@events_bp.route("/search", methods=["GET"])
def search_events() -> Tuple[Response, int]:
    """
    Search events. Public.

    Query params (all optional, ANDed):
    - keyword: matches title, category or organizer (case-insensitive).
    - category: exact match.
    - date: exact match.
    - location: substring match (case-insensitive).

    Returns:
        200: { "events": [Event, ...] }
    """
    query = SearchQuery.from_mapping(request.args)
    events = get_services().search.search(query)
    return jsonify({"events": [e.to_dict() for e in events]}), 200


@events_bp.route("/filters", methods=["GET"])
def list_filters() -> Tuple[Response, int]:
    """
    Describe the available search filters and the category set.
    """
    return jsonify({"filters": SEARCH_FILTERS, "categories": list(CATEGORIES)}), 200


@events_bp.route("/<int:event_id>", methods=["GET"])
def get_event(event_id: int) -> Tuple[Response, int]:
    """
    Get a single event by ID.

    Returns:
        200: Event object.
        404: Event not found.
    """
    event = get_services().catalog.get(event_id)
    return jsonify(event.to_dict()), 200


@events_bp.route("", methods=["POST"])
def create_event() -> Tuple[Response, int]:
    """
    Create an event owned by the caller.

    Required: title, date, time, location, description.
    Optional: category (Community, Market, Fitness, Art), organizer
    (defaults to the caller's name).

    Returns:
        201: The created Event.
        400: Validation error.
        401: Not logged in.
    """
    data: Dict[str, Any] = json_body()
    event = get_services().catalog.create(current_actor(), data)
    return jsonify(event.to_dict()), 201


@events_bp.route("/<int:event_id>", methods=["PUT"])
def update_event(event_id: int) -> Tuple[Response, int]:
    """
    Update an event. Only its creator may do this.

    Returns:
        200: The updated Event.
        400: Validation error.
        401: Not logged in.
        403: Not the creator.
        404: Event not found.
    """
    data: Dict[str, Any] = json_body()
    event = get_services().catalog.update(current_actor(), event_id, data)
    return jsonify(event.to_dict()), 200


@events_bp.route("/<int:event_id>", methods=["DELETE"])
def delete_event(event_id: int) -> Tuple[Response, int]:
    """
    Delete an event and its comments. Only its creator may do this.

    Returns:
        200: Success message.
        401: Not logged in.
        403: Not the creator.
        404: Event not found.
    """
    get_services().catalog.delete(current_actor(), event_id)
    return jsonify({"success": True, "message": "Event deleted successfully"}), 200
