"""Account API endpoints: accounts, their ledgers, budgets and reconciliation."""

from dataclasses import asdict
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import StreamingResponse

from ledgerbank.application.dto import ExportResponse, OpenAccountRequest
from ledgerbank.application.services import AccountService, LedgerService
from ledgerbank.core.dependencies import get_account_service, get_ledger_service
from ledgerbank.presentation.schemas import (
    AccountSchema,
    BudgetResponseSchema,
    ErrorResponseSchema,
    OpenAccountSchema,
    ReconciliationSchema,
    TransactionSchema,
)

accounts_router = APIRouter(
    prefix="/accounts",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Resource not found"},
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)

AccountId = Annotated[int, Path(ge=1, description="Account identifier")]


def _csv_download(export: ExportResponse) -> StreamingResponse:
    return StreamingResponse(
        export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@accounts_router.post(
    "",
    response_model=AccountSchema,
    status_code=201,
    summary="Open Account",
    description="""
Open an account for an existing user.

A positive `opening_balance_cents` is recorded as the account's first
credit transaction, so the balance always equals the signed sum of the
ledger.
    """,
)
async def open_account(
    request: OpenAccountSchema,
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountSchema:
    response = await account_service.open_account(
        OpenAccountRequest(
            user_id=request.user_id,
            name=request.name,
            opening_balance_cents=request.opening_balance_cents,
        )
    )
    return AccountSchema(**asdict(response))


@accounts_router.get(
    "",
    response_model=List[AccountSchema],
    summary="List Accounts",
)
async def list_accounts(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    user_id: Annotated[Optional[int], Query(ge=1, description="Restrict to one user")] = None,
) -> List[AccountSchema]:
    accounts = await account_service.list_accounts(user_id)
    return [AccountSchema(**asdict(a)) for a in accounts]


# Must be declared before /{account_id} so "export" isn't parsed as an id
@accounts_router.get(
    "/export",
    response_class=StreamingResponse,
    summary="Export Accounts",
    description="Download every account as CSV.",
)
async def export_accounts(
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> StreamingResponse:
    return _csv_download(await account_service.export_accounts())


@accounts_router.get(
    "/{account_id}",
    response_model=AccountSchema,
    summary="Get Account",
)
async def get_account(
    account_id: AccountId,
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountSchema:
    response = await account_service.get_account(account_id)
    return AccountSchema(**asdict(response))


@accounts_router.get(
    "/{account_id}/transactions",
    response_model=List[TransactionSchema],
    summary="List Transactions",
    description="Returns the account's transactions, oldest first.",
)
async def list_transactions(
    account_id: AccountId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> List[TransactionSchema]:
    transactions = await ledger_service.list_transactions(account_id)
    return [TransactionSchema(**asdict(t)) for t in transactions]


@accounts_router.get(
    "/{account_id}/budgets/{budget_cents}",
    response_model=BudgetResponseSchema,
    summary="Transactions Within Budget",
    description="""
Walk the account's spending oldest first and return the longest run whose
running total stays within `budget_cents`. The walk stops at the first
transaction that would exceed the budget; later, smaller ones are not
considered.
    """,
)
async def transactions_within_budget(
    account_id: AccountId,
    budget_cents: Annotated[int, Path(description="Budget in cents")],
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> BudgetResponseSchema:
    response = await ledger_service.transactions_within_budget(account_id, budget_cents)
    return BudgetResponseSchema(**asdict(response))


@accounts_router.get(
    "/{account_id}/export",
    response_class=StreamingResponse,
    summary="Export Ledger",
    description="Download the account's transactions as CSV, oldest first.",
)
async def export_transactions(
    account_id: AccountId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> StreamingResponse:
    return _csv_download(await ledger_service.export_transactions(account_id))


@accounts_router.get(
    "/{account_id}/reconciliation",
    response_model=ReconciliationSchema,
    summary="Verify Balance",
    description="Compare the stored balance with the sum of the ledger without changing anything.",
)
async def verify_balance(
    account_id: AccountId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> ReconciliationSchema:
    response = await ledger_service.verify_balance(account_id)
    return ReconciliationSchema(**asdict(response))


@accounts_router.post(
    "/{account_id}/reconciliation",
    response_model=ReconciliationSchema,
    summary="Recompute Balance",
    description="Recalculate the balance and transaction count from the ledger and store them.",
)
async def recompute_balance(
    account_id: AccountId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> ReconciliationSchema:
    response = await ledger_service.recompute_balance(account_id)
    return ReconciliationSchema(**asdict(response))
