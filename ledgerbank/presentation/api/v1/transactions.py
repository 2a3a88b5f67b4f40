"""Transaction API endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from ledgerbank.application.dto import AmendTransactionRequest, RecordTransactionRequest
from ledgerbank.application.services import LedgerService
from ledgerbank.core.dependencies import get_ledger_service
from ledgerbank.presentation.schemas import (
    AmendTransactionSchema,
    ErrorResponseSchema,
    LedgerEntrySchema,
    RecordTransactionSchema,
    TransactionSchema,
)

transactions_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Resource not found"},
        409: {"model": ErrorResponseSchema, "description": "Concurrent update, retry"},
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)

TransactionId = Annotated[int, Path(ge=1, description="Transaction identifier")]


@transactions_router.post(
    "",
    response_model=LedgerEntrySchema,
    status_code=201,
    summary="Record Transaction",
    description="""
Record a debit (`type` 0) or credit (`type` 1) on an account and apply it
to the account balance in the same database transaction.

The stored name is upper-cased and prefixed with its type, e.g. `T0-RENT`.
    """,
)
async def record_transaction(
    request: RecordTransactionSchema,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> LedgerEntrySchema:
    response = await ledger_service.record_transaction(
        RecordTransactionRequest(
            account_id=request.account_id,
            name=request.name,
            amount_cents=request.amount_cents,
            type=request.type,
        )
    )
    return LedgerEntrySchema(**asdict(response))


@transactions_router.get(
    "/{transaction_id}",
    response_model=TransactionSchema,
    summary="Get Transaction",
)
async def get_transaction(
    transaction_id: TransactionId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> TransactionSchema:
    response = await ledger_service.get_transaction(transaction_id)
    return TransactionSchema(**asdict(response))


@transactions_router.patch(
    "/{transaction_id}",
    response_model=LedgerEntrySchema,
    summary="Amend Transaction",
    description="Change amount and type (and optionally name); the balance is adjusted by the difference.",
)
async def amend_transaction(
    transaction_id: TransactionId,
    request: AmendTransactionSchema,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> LedgerEntrySchema:
    response = await ledger_service.amend_transaction(
        AmendTransactionRequest(
            transaction_id=transaction_id,
            amount_cents=request.amount_cents,
            type=request.type,
            name=request.name,
        )
    )
    return LedgerEntrySchema(**asdict(response))


@transactions_router.delete(
    "/{transaction_id}",
    response_model=LedgerEntrySchema,
    summary="Delete Transaction",
    description="Reverse the transaction's effect on the balance and remove it.",
)
async def delete_transaction(
    transaction_id: TransactionId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> LedgerEntrySchema:
    response = await ledger_service.delete_transaction(transaction_id)
    return LedgerEntrySchema(**asdict(response))
