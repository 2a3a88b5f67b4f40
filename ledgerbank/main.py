"""
Ledgerbank - Main Application Entry Point

A small banking backend: users own accounts, accounts own a ledger of
debit and credit transactions, and every account's stored balance is kept
equal to the signed sum of its ledger.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from ledgerbank import __version__
from ledgerbank.core.config import settings
from ledgerbank.core.logging import setup_logging
from ledgerbank.core.metrics import get_metrics, get_metrics_content_type
from ledgerbank.infrastructure.database import db_manager
from ledgerbank.presentation.api import api_router
from ledgerbank.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Initialize the database engine and, if enabled, create the schema
    - Dispose of the engine on shutdown
    """
    setup_logging()
    db_manager.init()
    if settings.db_create_schema:
        await db_manager.create_schema()

    logger = structlog.get_logger(__name__)
    logger.info("application_started", version=__version__)

    yield

    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Ledgerbank",
    description="Accounts, ledgers and balances with strict consistency",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""
    return RedirectResponse(url="/docs")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "ledgerbank.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
