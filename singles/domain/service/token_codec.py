"""Split bearer tokens.

A combined token is ``<owner_id>.<secret>``. The owner id is public and used
for lookup; only a salted SHA-256 hash of the secret is ever persisted.
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field

SEPARATOR = "."
SECRET_BYTES = 32  # 256 bits of entropy
SALT_BYTES = 16


@dataclass(frozen=True)
class IssuedToken:
    """Artifacts produced when issuing a token.

    ``combined_token`` and ``raw_secret`` are handed to the invitee and
    never stored.
    """

    combined_token: str = field(repr=False)
    secret_hash: bytes = field(repr=False)
    salt: bytes = field(repr=False)
    raw_secret: str = field(repr=False)


def parse_token(combined_token: str) -> tuple[str, str] | None:
    """Split a combined token into ``(owner_id, secret)``.

    Returns:
        The two parts, or None if the token is malformed
    """
    if not isinstance(combined_token, str):
        return None
    owner_id, sep, secret = combined_token.strip().partition(SEPARATOR)
    if not sep or not owner_id or not secret or SEPARATOR in secret:
        return None
    return owner_id, secret


def format_token(owner_id: str, secret: str) -> str:
    """Join an owner id and secret into a combined token."""
    return f"{owner_id}{SEPARATOR}{secret}"


def hash_secret(secret: str, salt: bytes) -> bytes:
    return hashlib.sha256(secret.encode("utf-8") + salt).digest()


class TokenCodec:
    """Issues and verifies split tokens. Stateless."""

    def issue(self, owner_id: str) -> IssuedToken:
        """Generate a fresh token for ``owner_id``.

        Args:
            owner_id: Public identifier embedded in the token (invite or activation id)

        Returns:
            The combined token together with the hash and salt to persist
        """
        raw_secret = secrets.token_urlsafe(SECRET_BYTES)
        salt = secrets.token_bytes(SALT_BYTES)
        return IssuedToken(
            combined_token=format_token(owner_id, raw_secret),
            secret_hash=hash_secret(raw_secret, salt),
            salt=salt,
            raw_secret=raw_secret,
        )

    def verify(self, combined_token: str, stored_hash: bytes, stored_salt: bytes) -> bool:
        """Check a presented token against the stored hash and salt.

        The comparison is constant-time.
        """
        parsed = parse_token(combined_token)
        if parsed is None:
            return False
        _, secret = parsed
        candidate = hash_secret(secret, stored_salt)
        return hmac.compare_digest(candidate, stored_hash)

    def parse(self, combined_token: str) -> tuple[str, str] | None:
        return parse_token(combined_token)

    def format(self, owner_id: str, secret: str) -> str:
        return format_token(owner_id, secret)
