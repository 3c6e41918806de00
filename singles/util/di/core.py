"""Configuration providers shared by every layer."""

from dishka import Scope, provide

from singles.config import AuthSettings, EmailSettings, Settings
from singles.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and their nested groups, built once per process.

    Nothing here is mocked: tests configure behaviour through environment
    variables, which ``Settings`` reads on construction.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """JWT and password policy, consumed by JWTService."""
        return settings.auth

    @provide
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        """Delivery endpoint and admin recipients for notifications."""
        return settings.email
