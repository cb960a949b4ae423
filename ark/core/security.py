"""
Security utilities: bearer-token verification.

Tokens are issued by the external identity provider; this service only
verifies them. The `sub` claim is the tenant identifier every data
operation is scoped to.
"""
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ark.core.config import settings


def decode_access_token(token: str) -> str | None:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_VERIFY_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"verify_aud": False},
        )
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Mint a token for local development. Requires JWT_SIGNING_KEY."""
    if not settings.JWT_SIGNING_KEY:
        raise RuntimeError("JWT_SIGNING_KEY is not configured")
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)),
    }
    if settings.JWT_ISSUER:
        payload["iss"] = settings.JWT_ISSUER
    return jwt.encode(payload, settings.JWT_SIGNING_KEY, algorithm=settings.JWT_ALGORITHM)
