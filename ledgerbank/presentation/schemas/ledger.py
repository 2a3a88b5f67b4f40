"""Budget and reconciliation Pydantic schemas."""

from pydantic import BaseModel, Field

from .transaction import TransactionSchema


class BudgetResponseSchema(BaseModel):
    """Schema for GET /v1/accounts/{account_id}/budgets/{budget_cents} response."""

    account_id: int
    budget_cents: int = Field(..., ge=0)
    total_cents: int = Field(..., description="Running total of the selected transactions")
    transactions: list[TransactionSchema] = Field(
        ...,
        description="Selected transactions, oldest first",
    )


class ReconciliationSchema(BaseModel):
    """Schema for balance verification and recomputation responses."""

    account_id: int
    stored_balance_cents: int
    computed_balance_cents: int
    drift_cents: int = Field(..., description="stored - computed")
    stored_transaction_count: int
    computed_transaction_count: int
    in_sync: bool
    repaired: bool = Field(..., description="True when stored values were overwritten")
