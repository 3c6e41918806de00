"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from singles.domain.model.account import Account
from singles.domain.value import UserId


class AccountRepository(ABC):
    """Repository for member accounts.

    Onboarding creates single accounts and reads couple accounts; the rest
    of account management lives elsewhere.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Account | None:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Account | None:
        """Find an account by email, compared case-insensitively."""
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        pass

    @abstractmethod
    async def add(self, account: Account) -> Account:
        """Insert a new account.

        Raises:
            DuplicateError: If the email or username is taken
        """
        pass

    @abstractmethod
    async def link_single(
        self,
        user_id: UserId,
        password_hash: str,
        invite_source_user_id: UserId,
        now: datetime,
    ) -> Account | None:
        """Set credentials on an existing single account.

        The invite source is only filled when empty, and the email is
        marked verified.

        Returns:
            The updated account, or None if it does not exist
        """
        pass
