"""Activation token repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from singles.domain.model.activation import ActivationToken
from singles.domain.value import ActivationId, InviteId


class ActivationRepository(ABC):
    """Repository for ActivationToken entity."""

    @abstractmethod
    async def find_by_id(self, activation_id: ActivationId) -> ActivationToken | None:
        pass

    @abstractmethod
    async def replace_for_invite(
        self, token: ActivationToken, now: datetime
    ) -> ActivationToken:
        """Consume any unconsumed token for the invite and insert ``token``.

        Both steps run in one transaction, so at most one redeemable token
        exists per invite.
        """
        pass

    @abstractmethod
    async def consume(
        self, activation_id: ActivationId, now: datetime, claim_id: UUID
    ) -> bool:
        """Atomically mark a token consumed on behalf of ``claim_id``.

        A repeated call with the same ``claim_id`` (a retried statement whose
        first reply was lost) finds its own claim and also returns True.

        Returns:
            True if ``claim_id`` holds the token, False if another claim does
        """
        pass

    @abstractmethod
    async def release(self, activation_id: ActivationId, claim_id: UUID) -> bool:
        """Make the token redeemable again if ``claim_id`` still holds it.

        Used when a redemption fails after winning the claim.
        """
        pass

    @abstractmethod
    async def consume_all_for_invite(self, invite_id: InviteId, now: datetime) -> int:
        """Consume every outstanding token for an invite. Returns the count."""
        pass
