"""
Request parsing helpers for API routes.
"""

from typing import Optional


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header value.

    The scheme name is matched case-insensitively; the token itself is
    returned verbatim. Returns None when the header is missing, uses another
    scheme, or carries no token.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(' ')
    if scheme.lower() != 'bearer':
        return None
    token = token.strip()
    return token or None
