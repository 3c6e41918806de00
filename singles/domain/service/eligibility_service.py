"""Inviter eligibility domain service."""

import logfire

from singles.domain.error import IneligibleError, NotFoundError
from singles.domain.model.account import DEFAULT_COUPLE_NAME, Account
from singles.domain.model.common import utcnow
from singles.domain.repository.account import AccountRepository
from singles.domain.value import AccountKind, UserId

from .base import Clock, Service


class EligibilityService(Service):
    """Decides whether a couple may invite singles.

    An eligible inviter is a couple account with both partner emails
    verified and a paid, non-expired membership.
    """

    def __init__(
        self, account_repository: AccountRepository, clock: Clock = utcnow
    ) -> None:
        self.account_repository = account_repository
        self.clock = clock

    async def assert_eligible(self, user_id: UserId) -> Account:
        """Load the inviter and check every eligibility rule in order.

        Returns:
            The inviter's account

        Raises:
            NotFoundError: If the account does not exist
            IneligibleError: If any rule fails
        """
        with logfire.span("eligibility_service.assert_eligible", user_id=str(user_id)):
            account = await self.account_repository.find_by_id(user_id)
            if not account:
                raise NotFoundError("Account", str(user_id))

            if account.kind != AccountKind.COUPLE:
                raise IneligibleError("Only couple accounts can invite singles.")

            if not (account.is_email_verified and account.is_partner_email_verified):
                raise IneligibleError(
                    "Both partner emails must be verified before inviting singles."
                )

            if not account.has_active_membership(self.clock()):
                raise IneligibleError(
                    "An active paid membership is required to invite singles."
                )

            return account

    async def is_inviter_eligible(self, user_id: UserId) -> bool:
        try:
            await self.assert_eligible(user_id)
        except (NotFoundError, IneligibleError) as e:
            logfire.info("Inviter not eligible", user_id=str(user_id), reason=str(e))
            return False
        return True

    async def inviter_display_name(self, user_id: UserId) -> str:
        """Name of the inviting couple as shown in notifications."""
        account = await self.account_repository.find_by_id(user_id)
        return account.display_name if account else DEFAULT_COUPLE_NAME
