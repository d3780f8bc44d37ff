"""
Token helpers - admin session tokens (signed here) and member tokens (signed by the identity provider).
"""
import secrets
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from backend.app.core.config import ADMIN_ID, ADMIN_ROLE, MEMBER_ROLE, settings


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified."""


def verify_admin_password(candidate: str) -> bool:
    """Constant-time comparison against the shared admin password. Unset password never matches."""
    if not settings.admin_password or not candidate:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), settings.admin_password.encode("utf-8"))


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT with an exp claim."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_admin_token() -> str:
    return create_access_token(data={"sub": ADMIN_ID, "role": ADMIN_ROLE})


def decode_admin_token(token: str) -> dict:
    """Decode a token issued by create_admin_token. Raises InvalidTokenError."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e
    if payload.get("role") != ADMIN_ROLE:
        raise InvalidTokenError("Token is not an admin token")
    return payload


def decode_member_token(token: str) -> dict:
    """
    Verify a member access token issued by the identity provider (Supabase).
    Returns {id, email, role}. Raises InvalidTokenError when member auth is not configured.
    """
    if not settings.supabase_jwt_secret:
        raise InvalidTokenError("Member authentication is not configured")
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.supabase_jwt_audience,
        )
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e
    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Member token has no subject")
    return {"id": subject, "email": payload.get("email") or "", "role": MEMBER_ROLE}
