"""Base domain exceptions."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Domain exceptions represent business rule violations or
    domain-specific error conditions.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a referenced entity does not exist."""


class InvalidArgumentException(DomainException):
    """Raised when an operation receives an argument it cannot accept."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="INVALID_ARGUMENT",
        )
        self.field = field
