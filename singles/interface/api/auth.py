"""Cookie-based authentication for API routes."""

from fastapi import HTTPException, status

from singles.domain.service import JWTService
from singles.domain.value import AccountKind
from singles.util.jwt import JWTError, TokenPayload


def authenticate(
    jwt_service: JWTService,
    auth_token: str | None,
    kind: AccountKind | None = None,
) -> TokenPayload:
    """Verify the ``auth_token`` cookie.

    Args:
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        kind: Account kind the route is restricted to, if any

    Raises:
        HTTPException: 401 if not authenticated, 403 if the kind does not match
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    if kind is not None and payload.kind != kind:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only {kind.value} accounts can do this.",
        )
    return payload


def require_moderator(jwt_service: JWTService, auth_token: str | None) -> TokenPayload:
    """Like ``authenticate`` but also requires the moderator claim."""
    payload = authenticate(jwt_service, auth_token)
    if not payload.is_moderator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator access required",
        )
    return payload
