"""JWT token domain service."""

import logfire

from singles.config import AuthSettings
from singles.domain.value import AccountKind
from singles.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(
        self, user_id: str, kind: AccountKind, is_moderator: bool = False
    ) -> str:
        """Create JWT token for a member.

        Args:
            user_id: Account ID
            kind: Account kind
            is_moderator: Moderator claim

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, kind, self.auth_settings, is_moderator)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
