"""Email delivery client.

Posts templated messages to an HTTP email delivery service. Rendering
happens on the service side; this client only sends the template name,
recipients and template data.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx
import logfire

from singles.adapter.error import NotificationError
from singles.domain.service.notification import NotificationClient


class HttpNotificationClient(NotificationClient):
    """Notification client backed by an HTTP email delivery API."""

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        sender: str,
        admin_recipients: list[str] | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize email client.

        Args:
            base_url: Delivery service URL; when None, messages are logged and dropped
            api_key: Bearer token for the delivery service
            sender: From address
            admin_recipients: Moderators notified about new members
            timeout_seconds: Deadline for each delivery request
            transport: Optional httpx transport, used by tests
        """
        super().__init__(admin_recipients)
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.sender = sender
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def send(
        self, template: str, recipients: list[str], data: dict[str, Any]
    ) -> None:
        if not self.base_url:
            logfire.warn(
                "Email service not configured - message not sent",
                template=template,
                recipient_count=len(recipients),
            )
            return

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {
            "template": template,
            "from": self.sender,
            "to": recipients,
            "data": data,
        }

        with logfire.span("email.send", template=template):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout_seconds, transport=self.transport
                ) as client:
                    response = await client.post(
                        f"{self.base_url}/messages", json=payload, headers=headers
                    )
                    response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise NotificationError(
                    f"Email service returned {e.response.status_code}",
                    template=template,
                ) from e
            except httpx.HTTPError as e:
                raise NotificationError(
                    f"Email delivery failed: {e}", template=template
                ) from e

            logfire.info(
                "Email sent", template=template, recipient_count=len(recipients)
            )


@dataclass
class SentMessage:
    template: str
    recipients: list[str]
    data: dict[str, Any] = field(default_factory=dict)


class MockNotificationClient(NotificationClient):
    """Mock notification client for testing.

    Records messages instead of sending them. Set ``fail`` to make every
    send raise NotificationError.
    """

    def __init__(
        self, admin_recipients: list[str] | None = None, fail: bool = False
    ) -> None:
        super().__init__(admin_recipients or ["moderators@example.com"])
        self.fail = fail
        self.sent: list[SentMessage] = []

    async def send(
        self, template: str, recipients: list[str], data: dict[str, Any]
    ) -> None:
        if self.fail:
            raise NotificationError("Mock delivery failure", template=template)
        self.sent.append(SentMessage(template, list(recipients), dict(data)))

    def sent_with(self, template: str) -> list[SentMessage]:
        return [message for message in self.sent if message.template == template]
