"""
Authentication service route handlers.

Provides routes for:
- User registration (logs the new user in)
- User login
- Logout
- Session status

The session token travels in an HttpOnly cookie; all token logic lives in
`auth_service.utils` and `auth_service.sessions`.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, Response, jsonify

from community_board.auth_service.utils import (
    clear_session_cookie,
    current_actor,
    set_session_cookie,
    token_from_request,
)
from community_board.errors import ValidationError
from community_board.gateway.helpers import add_request_logging, json_body
from community_board.services import get_services

auth_bp = Blueprint("auth", __name__)

# --- REQUEST LOGGING ---
add_request_logging(auth_bp, "Auth")


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user and open a session for them.

    Expects a JSON body with:
    - name (str)
    - email (str): Unique, case-insensitive.
    - password (str)

    Returns:
        201: { success, user, message } and a session cookie.
        400: Missing fields.
        409: Email already exists.
    """
    services = get_services()
    data: Dict[str, Any] = json_body()

    user = services.directory.register(data.get("name"), data.get("email"), data.get("password"))
    token = services.sessions.create_session(user.id)

    response = jsonify({"success": True, "user": user.to_dict(), "message": "Registration successful"})
    return set_session_cookie(response, token), 201


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user and open a session.

    Expects a JSON body with:
    - email (str)
    - password (str)

    Returns:
        200: { success, user, message } and a session cookie.
        400: Missing credentials.
        401: Invalid credentials (wrong password or email).
    """
    services = get_services()
    data: Dict[str, Any] = json_body()
    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        raise ValidationError("Email and password are required")

    user = services.directory.authenticate(email, password)
    token = services.sessions.create_session(user.id)

    response = jsonify({"success": True, "user": user.to_dict(), "message": "Login successful"})
    return set_session_cookie(response, token), 200


# --- LOGOUT ---
@auth_bp.route("/logout", methods=["POST"])
def logout() -> Tuple[Response, int]:
    """
    Close the caller's session, if any. Always succeeds.
    """
    get_services().sessions.destroy(token_from_request())

    response = jsonify({"success": True, "message": "Logged out successfully"})
    return clear_session_cookie(response), 200


# --- SESSION STATUS ---
@auth_bp.route("/status", methods=["GET"])
def status() -> Tuple[Response, int]:
    """
    Report whether the caller is logged in.

    Returns:
        200: { isLoggedIn: bool, user?: User }
    """
    actor = current_actor()
    if actor is None:
        return jsonify({"isLoggedIn": False}), 200
    return jsonify({"isLoggedIn": True, "user": actor.to_dict()}), 200
