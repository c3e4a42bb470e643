"""
Shared authentication helpers.
Provides session token signing/decoding and per-request actor resolution.
"""

import os
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from flask import current_app, g, request
from dotenv import load_dotenv

from community_board.models import User

# Load .env only once here
load_dotenv()

# Load secrets & configs
SESSION_SECRET = os.getenv("SESSION_SECRET")
if not SESSION_SECRET:
    raise RuntimeError("SESSION_SECRET is missing. Set it in .env")

SESSION_EXPIRATION_MINUTES = int(os.getenv("SESSION_EXPIRATION_MINUTES", 1440))  # Default 24 hours
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session_token")
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")

ALGORITHM = "HS256"


# --- TOKEN CREATION ---
def create_token(session_id: str, user_id: int, issued_at: datetime, expires_at: datetime) -> str:
    """
    Sign the opaque token handed to the client for a session.

    Args:
        session_id (str): The random server-side session key.
        user_id (int): The user the session belongs to.
        issued_at (datetime): Session creation time (UTC).
        expires_at (datetime): Session expiry time (UTC).

    Returns:
        str: Encoded JWT string.
    """
    payload = {
        "sid": session_id,
        "sub": str(user_id),
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, SESSION_SECRET, algorithm=ALGORITHM)


# --- TOKEN VALIDATION ---
def decode_token(token: str, verify_exp: bool = True) -> Optional[Dict[str, Any]]:
    """
    Validate a session token.

    Args:
        token (str): The token from the client.
        verify_exp (bool): Reject expired tokens (disabled when only the session id is needed).

    Returns:
        dict: The payload if the signature and expiry check out, None otherwise.
    """
    try:
        return jwt.decode(token, SESSION_SECRET, algorithms=[ALGORITHM], options={"verify_exp": verify_exp})
    except jwt.PyJWTError:
        return None


def session_lifetime() -> timedelta:
    return timedelta(minutes=SESSION_EXPIRATION_MINUTES)


# --- REQUEST HELPERS ---
def token_from_request() -> Optional[str]:
    """Read the session token from the cookie, falling back to a Bearer header."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        return token
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return None


def current_actor() -> Optional[User]:
    """
    Resolve the acting user for this request, once.

    A missing, invalid or expired session is anonymous (None), never an error.
    """
    if "actor" not in g:
        token = token_from_request()
        sessions = current_app.extensions["community_board"].sessions
        g.actor = sessions.resolve(token) if token else None
    return g.actor


def set_session_cookie(response, token: str):
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=int(session_lifetime().total_seconds()),
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="Lax",
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(SESSION_COOKIE_NAME, httponly=True, secure=SESSION_COOKIE_SECURE, samesite="Lax")
    return response
