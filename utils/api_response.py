"""
JSON envelope helpers shared by every endpoint.

    success:  {"success": true, "data": ..., "message": "...", <extra>}
    failure:  {"success": false, "error": "...", "code": "...", <context>}

Engine exceptions are rendered with api_exception(); everything else calls
api_success() / api_error() directly.
"""

from typing import Any

from flask import jsonify


def _envelope(ok: bool, status: int, body: dict, extra: dict) -> tuple:
    payload = {'success': ok, **body}
    payload.update(extra)
    return jsonify(payload), status


def api_success(data: Any = None, message: str | None = None, status: int = 200,
                **extra: Any) -> tuple:
    """
    Success response.

    Args:
        data: Payload under 'data' (dict or list), omitted when None
        message: Human-readable confirmation
        status: HTTP status (200, or 201 for creations)
        **extra: Top-level fields such as count

    Returns:
        (Response, status)
    """
    body = {}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return _envelope(True, status, body, extra)


def api_error(error: str, status: int = 400, **context: Any) -> tuple:
    """
    Error response.

    Args:
        error: Human-readable message
        status: HTTP status
        **context: code, field errors, conflicts, stored reservation...

    Returns:
        (Response, status)
    """
    return _envelope(False, status, {'error': error}, context)


def api_exception(exc) -> tuple:
    """Render a ReservationError (message, code, status and context) as an error response."""
    context = exc.to_dict()
    message = context.pop('error')
    return api_error(message, exc.status_code, **context)
