"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StoreUnavailableError(PersistenceError):
    """Raised when a transient store failure persists after all retries."""

    def __init__(self, attempts: int, cause: BaseException):
        self.attempts = attempts
        super().__init__(
            f"Store unavailable after {attempts} attempts: {type(cause).__name__}"
        )


class SchemaNotReadyError(PersistenceError):
    """Raised when required tables are missing (migrations not applied)."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Database schema is not ready, missing tables: " + ", ".join(missing)
        )
