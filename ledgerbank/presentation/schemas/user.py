"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .account import AccountSchema


class CreateUserSchema(BaseModel):
    """Schema for POST /v1/users request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"name": "Valentin Montagne", "email": "contact@vm-it-consulting.com"}
            ]
        }
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Display name of the user",
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=512,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Contact email address",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is not just whitespace."""
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()


class UserSchema(BaseModel):
    """Schema for a user in responses."""

    user_id: int
    name: str
    email: str
    account_count: int = Field(..., ge=0, description="Number of accounts owned")
    created_at: str = Field(..., description="Creation time in ISO 8601 format")


class UserDetailSchema(UserSchema):
    """Schema for GET /v1/users/{user_id} response."""

    accounts: list[AccountSchema] = Field(
        default_factory=list,
        description="Accounts owned by the user",
    )
