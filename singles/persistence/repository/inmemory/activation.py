"""In-memory activation token repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from singles.domain.model.activation import ActivationToken
from singles.domain.repository.activation import ActivationRepository
from singles.domain.value import ActivationId, InviteId


class InMemoryActivationRepository(ActivationRepository):
    """In-memory implementation of ActivationRepository for testing."""

    def __init__(self) -> None:
        self._tokens: dict[ActivationId, ActivationToken] = {}
        self._claims: dict[ActivationId, UUID] = {}

    async def find_by_id(self, activation_id: ActivationId) -> Optional[ActivationToken]:
        return self._tokens.get(activation_id)

    async def replace_for_invite(
        self, token: ActivationToken, now: datetime
    ) -> ActivationToken:
        self._consume_where(lambda t: t.invite_id == token.invite_id, now)
        self._tokens[token.id] = token
        return token

    async def consume(
        self, activation_id: ActivationId, now: datetime, claim_id: UUID
    ) -> bool:
        token = self._tokens.get(activation_id)
        if token is None:
            return False
        if token.consumed_at is not None:
            return self._claims.get(activation_id) == claim_id
        self._tokens[activation_id] = token.model_copy(update={"consumed_at": now})
        self._claims[activation_id] = claim_id
        return True

    async def release(self, activation_id: ActivationId, claim_id: UUID) -> bool:
        token = self._tokens.get(activation_id)
        if token is None or self._claims.get(activation_id) != claim_id:
            return False
        del self._claims[activation_id]
        self._tokens[activation_id] = token.model_copy(update={"consumed_at": None})
        return True

    async def consume_all_for_invite(self, invite_id: InviteId, now: datetime) -> int:
        return self._consume_where(lambda t: t.invite_id == invite_id, now)

    def _consume_where(self, predicate, now: datetime) -> int:
        consumed = 0
        for token_id, token in list(self._tokens.items()):
            if token.consumed_at is None and predicate(token):
                self._tokens[token_id] = token.model_copy(update={"consumed_at": now})
                consumed += 1
        return consumed
