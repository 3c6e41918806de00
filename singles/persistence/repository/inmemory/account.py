"""In-memory account repository for testing."""

from datetime import datetime
from typing import Optional

from singles.domain.error import DuplicateError
from singles.domain.model.account import Account
from singles.domain.repository.account import AccountRepository
from singles.domain.value import UserId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[UserId, Account] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[Account]:
        return self._accounts.get(user_id)

    async def find_by_email(self, email: str) -> Optional[Account]:
        normalized = email.strip().lower()
        for account in self._accounts.values():
            if account.email.lower() == normalized:
                return account
        return None

    async def username_exists(self, username: str) -> bool:
        return any(a.username == username for a in self._accounts.values())

    async def add(self, account: Account) -> Account:
        for existing in self._accounts.values():
            if (
                existing.id == account.id
                or existing.email.lower() == account.email.lower()
                or existing.username == account.username
            ):
                raise DuplicateError("An account with this email or username exists")
        self._accounts[account.id] = account
        return account

    async def link_single(
        self,
        user_id: UserId,
        password_hash: str,
        invite_source_user_id: UserId,
        now: datetime,
    ) -> Optional[Account]:
        account = self._accounts.get(user_id)
        if account is None:
            return None
        updated = account.model_copy(
            update={
                "password_hash": password_hash,
                "invite_source_user_id": account.invite_source_user_id
                or invite_source_user_id,
                "is_email_verified": True,
                "updated_at": now,
            }
        )
        self._accounts[user_id] = updated
        return updated
