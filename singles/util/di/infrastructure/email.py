"""Email delivery providers."""

from dishka import Scope, provide

from singles.adapter.email.client import HttpNotificationClient
from singles.config import EmailSettings
from singles.domain.service import NotificationClient
from singles.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider posting to the delivery API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_client(self, email: EmailSettings) -> NotificationClient:
        """Provide the HTTP notification client."""
        return HttpNotificationClient(
            base_url=email.base_url,
            api_key=email.api_key,
            sender=email.sender,
            admin_recipients=email.admin_recipients,
            timeout_seconds=email.timeout_seconds,
        )
