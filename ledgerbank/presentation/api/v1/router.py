from fastapi import APIRouter

from .users import users_router
from .accounts import accounts_router
from .transactions import transactions_router

router = APIRouter()

router.include_router(users_router, tags=["Users"])
router.include_router(accounts_router, tags=["Accounts"])
router.include_router(transactions_router, tags=["Transactions"])
