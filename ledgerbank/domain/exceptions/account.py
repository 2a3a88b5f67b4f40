"""Account-related domain exceptions."""

from .base import NotFoundException


class AccountNotFoundException(NotFoundException):
    """Raised when an account cannot be found."""

    def __init__(self, account_id: int):
        super().__init__(
            message=f"Account not found: {account_id}",
            code="ACCOUNT_NOT_FOUND",
        )
        self.account_id = account_id
