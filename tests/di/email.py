"""Mock email providers for testing."""

from dishka import Scope, provide

from singles.adapter.email.client import MockNotificationClient
from singles.domain.service import NotificationClient
from singles.util.di.infrastructure.email import EmailProvider


class MockEmailProvider(EmailProvider):
    """Mock email provider recording messages instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_notification_client(self) -> NotificationClient:
        """Provide recording notification client."""
        return MockNotificationClient()
