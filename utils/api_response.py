"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "Japanese error message"}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data={'id': 1}, message='予約を受け付けました')
    return api_error('必須項目が入力されていません', status=400)
"""

from flask import jsonify, request
from typing import Any

from utils.errors import ValidationError
from utils.messages import get_message


def api_success(
    data: Any = None,
    message: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional payload included as 'data' key (dict or list).
        message: Optional success message (Japanese).
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response
            (e.g., count for list endpoints, isValid for the area check).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message (Japanese).
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g., rule).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def json_body() -> dict:
    """
    Parse the request body as a JSON object.

    Returns:
        dict: Request body

    Raises:
        ValidationError: If the body is missing, not JSON, or not an object
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError(get_message('request_body_required'))
    return data
