from .api_responses import error_response, unauthorized_response
from .decorators import api_handler, require_cache_token
from .logging_config import setup_logging, get_logger
from .request_helpers import get_bearer_token

__all__ = [
    'error_response',
    'unauthorized_response',
    'api_handler',
    'require_cache_token',
    'setup_logging',
    'get_logger',
    'get_bearer_token',
]
