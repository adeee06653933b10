"""
Decorators for API endpoints.

This module provides decorators for consistent error handling and for
bearer-token protection of the cache admin endpoints.
"""

from functools import wraps
from quart import current_app, jsonify, request
from typing import Callable, Any

from .api_responses import unauthorized_response
from .logging_config import get_logger
from .request_helpers import get_bearer_token

logger = get_logger('API')

CACHE_API_REALM = 'Bearer realm="Cache API"'


def api_handler(log_errors: bool = True):
    """
    Decorator for API endpoints that handles:
    - Exception catching with proper logging
    - Consistent response format

    Args:
        log_errors: If True, logs the traceback of unexpected errors

    Usage:
        @api_blueprint.route('/endpoint', methods=['POST'])
        @api_handler()
        async def my_endpoint():
            # Just the logic, no try/except needed
            return {"data": "value"}  # Auto-wrapped with success=True
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                result = await func(*args, **kwargs)

                # Auto-wrap dict responses
                if isinstance(result, dict):
                    if 'success' not in result:
                        result = {"success": True, **result}
                    return jsonify(result)

                return result

            except ValueError as e:
                if log_errors:
                    logger.exception(f"{func.__name__} rejected request")
                return jsonify({"success": False, "error": str(e)}), 400
            except PermissionError as e:
                return jsonify({"success": False, "error": str(e)}), 403
            except FileNotFoundError as e:
                return jsonify({"success": False, "error": str(e)}), 404
            except Exception as e:
                if log_errors:
                    logger.exception(f"{func.__name__} failed")
                return jsonify({"success": False, "error": str(e)}), 500

        return wrapper
    return decorator


def require_cache_token(func: Callable) -> Callable:
    """
    Decorator that requires the cache admin bearer token.

    Rejects with 401 and a WWW-Authenticate challenge when the token is missing,
    wrong, or when no token is configured on the server at all.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        admin = current_app.extensions['cache_admin']
        token = get_bearer_token(request.headers.get('Authorization'))
        if not admin.validate_access(token):
            return unauthorized_response(challenge=CACHE_API_REALM)
        return await func(*args, **kwargs)
    return wrapper
