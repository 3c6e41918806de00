"""Invite repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from singles.domain.model.invite import Invite
from singles.domain.value import InviteId, InviteStatus, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def add_within_quota(self, invite: Invite, limit: int) -> bool:
        """Insert an invite if the inviter is below their active-invite ceiling.

        Counting and inserting happen atomically per inviter so that
        concurrent requests cannot overshoot the limit.

        Args:
            invite: The new invite
            limit: Maximum number of non-terminal invites per inviter

        Returns:
            True if the invite was inserted, False if the quota is exhausted
        """
        pass

    @abstractmethod
    async def count_active_by_inviter(self, inviter_id: UserId) -> int:
        """Count the inviter's invites in a non-terminal status.

        Args:
            inviter_id: The inviter's ID

        Returns:
            Number of active invites
        """
        pass

    @abstractmethod
    async def find_by_inviter(self, inviter_id: UserId) -> list[Invite]:
        """Find all invites owned by an inviter, most recent first.

        Terminal invites are included.

        Args:
            inviter_id: The inviter's ID

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def find_by_statuses(self, statuses: Iterable[InviteStatus]) -> list[Invite]:
        """Find invites in any of the given statuses, most recently updated first.

        Args:
            statuses: Statuses to match

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def transition(
        self,
        invite_id: InviteId,
        from_statuses: Iterable[InviteStatus],
        to_status: InviteStatus,
        now: datetime,
        consume: bool = False,
    ) -> Invite | None:
        """Move an invite to a new status if it is currently in ``from_statuses``.

        Performed as a single compare-and-set statement.

        Args:
            invite_id: The invite to transition
            from_statuses: Statuses the invite must currently be in
            to_status: Target status
            now: Timestamp for updated_at (and consumed_at when consuming)
            consume: Stamp consumed_at if not already set

        Returns:
            The updated invite, or None if the invite was not in an allowed status
        """
        pass

    @abstractmethod
    async def link_invitee(
        self, invite_id: InviteId, user_id: UserId, now: datetime
    ) -> None:
        """Record the account the invitee activated.

        Args:
            invite_id: The invite
            user_id: The invitee's account ID
            now: Timestamp for updated_at
        """
        pass
