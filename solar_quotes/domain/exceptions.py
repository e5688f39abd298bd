"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Request parameters are out of bounds or missing"""

    pass


class NotFoundError(DomainException):
    """A required record does not exist"""

    pass


class OwnerNotFoundError(NotFoundError):
    """Quote owner disappeared between quote write and profile read"""

    def __init__(self, user_id: str, quote_id: str | None = None):
        self.user_id = user_id
        self.quote_id = quote_id
        super().__init__(f"User {user_id} not found")


class StoreError(DomainException):
    """Persistence layer failed (connectivity, constraint violation)"""

    pass
