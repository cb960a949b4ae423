"""
FastAPI dependency functions for authentication.
"""
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ark.core.errors import UnauthorizedError
from ark.core.security import decode_access_token

log = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Resolve the authenticated tenant (the token's `sub` claim)."""
    if credentials is None or not credentials.credentials:
        log.debug("[Auth] missing or malformed Authorization header")
        raise UnauthorizedError("Missing authorization header")

    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        log.warning("[Auth] token verification failed")
        raise UnauthorizedError("Invalid or expired token")

    request.state.user_id = user_id
    return user_id
