"""User-related domain exceptions."""

from .base import NotFoundException


class UserNotFoundException(NotFoundException):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: int):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
        )
        self.user_id = user_id
