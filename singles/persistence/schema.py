"""Schema readiness guard.

Replaces module-level "schema ready" flags with an injectable component:
each check runs at most once successfully per guard, concurrent callers
wait on the same lock, and a failed check is retried on the next call.
"""

import asyncio
from collections.abc import Awaitable, Callable

import logfire


class SchemaGuard:
    """Runs idempotent schema checks once per key."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._done: set[str] = set()

    def is_ready(self, key: str) -> bool:
        return key in self._done

    async def ensure(self, key: str, check: Callable[[], Awaitable[None]]) -> None:
        """Run ``check`` unless it already succeeded for ``key``.

        Args:
            key: Name of the check
            check: Coroutine function raising on failure

        Raises:
            Whatever ``check`` raises; the key stays unset so the check runs again
        """
        if key in self._done:
            return
        async with self._lock:
            if key in self._done:
                return
            try:
                await check()
            except Exception as e:
                logfire.error("Schema check failed", key=key, error=str(e))
                raise
            self._done.add(key)
            logfire.info("Schema check passed", key=key)

    def reset(self) -> None:
        self._done.clear()
