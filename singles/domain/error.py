"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the actor does not own the resource they act on."""

    pass


class IneligibleError(DomainError):
    """Raised when an inviter fails the verification or membership checks."""

    pass


class QuotaExceededError(DomainError):
    """Raised when an inviter already holds the maximum of active invites."""

    def __init__(self, active: int, limit: int):
        self.active = active
        self.limit = limit
        super().__init__(
            f"You already have {active} active invites. "
            "Please revoke one before creating another."
        )


class ConflictError(DomainError):
    """Raised when a request conflicts with existing state."""

    pass


class DuplicateError(ConflictError):
    """Raised when a record that must be unique already exists."""

    pass


class InvalidTransitionError(ConflictError):
    """Raised when an invite or session cannot move to the requested status."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move from {current} to {target}")
