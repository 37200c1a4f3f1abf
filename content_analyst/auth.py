# content_analyst/auth.py
"""Bearer-token principal resolution (HS256 JWTs, principal = `sub` claim)."""
import logging
from typing import Optional

import jwt

from content_analyst import config
from content_analyst.errors import Unauthorized

logger = logging.getLogger(__name__)


def verify_token(token: str, secret: str, audience: Optional[str] = None) -> dict:
    """Verify and decode a JWT token."""
    options = {"verify_aud": bool(audience)}
    try:
        return jwt.decode(token, secret, algorithms=["HS256"], audience=audience or None, options=options)
    except jwt.ExpiredSignatureError as e:
        logger.warning("Token expired: %s", e)
        raise Unauthorized("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise Unauthorized("Token is invalid") from e


def principal_from_header(authorization: Optional[str]) -> str:
    """Return the user id carried by an `Authorization: Bearer <jwt>` header."""
    if not authorization:
        raise Unauthorized("User not found")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Authorization header must be a bearer token")
    if not config.AUTH_JWT_SECRET:
        raise Unauthorized("Token verification is not configured")

    payload = verify_token(token.strip(), config.AUTH_JWT_SECRET, config.AUTH_JWT_AUDIENCE)
    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("User not found")
    return str(user_id)
