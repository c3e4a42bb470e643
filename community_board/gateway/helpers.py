"""
Small request/response helpers shared by the service blueprints.
"""

import logging
from typing import Any, Dict

from flask import Blueprint, Response, request

from community_board.errors import ValidationError


def json_body() -> Dict[str, Any]:
    """
    Return the JSON object sent with the request ({} when there is no body).

    Raises:
        ValidationError: The body is not valid JSON or not a JSON object.
    """
    if not request.get_data(cache=True):
        return {}
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def add_request_logging(bp: Blueprint, label: str) -> None:
    """Log every request method/path and the response status for a blueprint."""

    @bp.before_request
    def before_request() -> None:
        # Headers are left out: they carry the session cookie
        logging.info(f"[{label}] Incoming {request.method} {request.path}")

    @bp.after_request
    def after_request(response: Response) -> Response:
        logging.info(f"[{label}] Response {response.status}")
        return response
