"""Outbound notification contract.

Delivery lives in the adapter layer; the domain only knows the
``send(template, recipients, data)`` primitive and the three messages
onboarding needs.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

INVITE_TEMPLATE = "single_invite"
ACTIVATION_TEMPLATE = "single_activation"
ADMIN_NEW_MEMBER_TEMPLATE = "admin_new_single_member"


class NotificationClient(ABC):
    """Sends templated emails."""

    def __init__(self, admin_recipients: list[str] | None = None) -> None:
        self.admin_recipients = list(admin_recipients or [])

    @abstractmethod
    async def send(
        self, template: str, recipients: list[str], data: dict[str, Any]
    ) -> None:
        """Deliver a templated message.

        Args:
            template: Template name known to the delivery service
            recipients: Email addresses
            data: JSON-serializable template variables

        Raises:
            NotificationError: If delivery fails
        """
        pass

    async def send_invite_email(
        self,
        to: str,
        invite_link: str,
        inviter_name: str,
        role_label: str,
        expires_at: datetime,
    ) -> None:
        await self.send(
            INVITE_TEMPLATE,
            [to],
            {
                "invite_link": invite_link,
                "inviter_name": inviter_name,
                "role_label": role_label,
                "expires_at": expires_at.isoformat(),
            },
        )

    async def send_activation_email(
        self,
        to: str,
        activation_link: str,
        inviter_name: str,
        role_label: str,
        expires_at: datetime,
    ) -> None:
        await self.send(
            ACTIVATION_TEMPLATE,
            [to],
            {
                "activation_link": activation_link,
                "inviter_name": inviter_name,
                "role_label": role_label,
                "expires_at": expires_at.isoformat(),
            },
        )

    async def notify_admin_new_member(self, details: dict[str, Any]) -> None:
        """Tell the moderators a single finished activation.

        Does nothing when no admin recipients are configured.
        """
        if not self.admin_recipients:
            return
        await self.send(ADMIN_NEW_MEMBER_TEMPLATE, self.admin_recipients, details)
