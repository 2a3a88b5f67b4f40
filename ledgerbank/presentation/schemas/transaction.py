"""Transaction-related Pydantic schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledgerbank.service.ledger import MAX_AMOUNT_CENTS


class RecordTransactionSchema(BaseModel):
    """Schema for POST /v1/transactions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"account_id": 1, "name": "groceries", "amount_cents": 2500, "type": 0}
            ]
        }
    )
    account_id: int = Field(..., ge=1, description="Account the transaction belongs to")
    name: str = Field(..., min_length=1, max_length=200, description="Transaction name")
    amount_cents: int = Field(
        ...,
        ge=0,
        le=MAX_AMOUNT_CENTS,
        description="Non-negative amount in cents",
    )
    type: Literal[0, 1] = Field(..., description="0 = debit, 1 = credit")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is not just whitespace."""
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v


class AmendTransactionSchema(BaseModel):
    """Schema for PATCH /v1/transactions/{transaction_id} request body."""

    amount_cents: int = Field(
        ...,
        ge=0,
        le=MAX_AMOUNT_CENTS,
        description="New non-negative amount in cents",
    )
    type: Literal[0, 1] = Field(..., description="New type: 0 = debit, 1 = credit")
    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=200,
        description="New name; the current one is kept when omitted",
    )


class TransactionSchema(BaseModel):
    """Schema for a transaction in responses."""

    transaction_id: int
    name: str = Field(..., examples=["T0-GROCERIES"])
    amount_cents: int = Field(..., ge=0)
    type: int = Field(..., ge=0, le=1)
    account_id: int
    created_at: str = Field(..., description="Creation time in ISO 8601 format")


class LedgerEntrySchema(BaseModel):
    """Schema for the result of a ledger mutation."""

    transaction: TransactionSchema
    account_id: int
    balance_cents: int = Field(..., description="Account balance after the operation")
    transaction_count: int = Field(..., ge=0)
