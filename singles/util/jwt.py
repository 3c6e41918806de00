"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from singles.config import AuthSettings
from singles.domain.value import AccountKind


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    kind: AccountKind
    is_moderator: bool = False
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    kind: AccountKind,
    settings: AuthSettings,
    is_moderator: bool = False,
) -> str:
    """Create a JWT token for a member.

    Args:
        user_id: Account ID
        kind: Account kind (couple or single)
        settings: Authentication settings
        is_moderator: Whether the member may act on the moderation queue

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "kind": kind.value,
        "is_moderator": is_moderator,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")
