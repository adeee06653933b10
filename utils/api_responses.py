"""
Standardized API response utilities.
All API endpoints should use these functions for consistent error format.
"""

from quart import jsonify, Response
from typing import Any, Dict, Optional, Tuple


def error_response(error: str, status_code: int = 400, data: Dict[str, Any] = None) -> Tuple[Response, int]:
    """
    Create a standardized error response.

    Args:
        error: Error message
        status_code: HTTP status code (default 400)
        data: Additional data to include

    Returns:
        Quart jsonify response with specified status code

    Example:
        return error_response("Invalid input", 400)
        # Returns: {"success": False, "error": "Invalid input"}, 400
    """
    response = {"success": False, "error": str(error)}
    if data:
        response.update(data)
    return jsonify(response), status_code


def unauthorized_response(message: str = "Unauthorized", challenge: Optional[str] = None) -> Tuple[Response, int]:
    """Create a 401 response, optionally with a WWW-Authenticate challenge."""
    response, status_code = error_response(message, 401)
    if challenge:
        response.headers['WWW-Authenticate'] = challenge
    return response, status_code
