"""Account-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledgerbank.service.ledger import MAX_AMOUNT_CENTS


class OpenAccountSchema(BaseModel):
    """Schema for POST /v1/accounts request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"user_id": 1, "name": "Compte courant", "opening_balance_cents": 200000}
            ]
        }
    )
    user_id: int = Field(..., ge=1, description="Owner of the account")
    name: str = Field(..., min_length=1, max_length=256, description="Account name")
    opening_balance_cents: int = Field(
        0,
        ge=0,
        le=MAX_AMOUNT_CENTS,
        description="Initial deposit, recorded as a credit transaction",
        examples=[200000],
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is not just whitespace."""
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()


class AccountSchema(BaseModel):
    """Schema for an account in responses."""

    account_id: int
    name: str
    user_id: int
    balance_cents: int = Field(..., description="Cached signed sum of the account's transactions")
    transaction_count: int = Field(..., ge=0)
    created_at: str = Field(..., description="Creation time in ISO 8601 format")
