"""User API endpoints."""

from dataclasses import asdict
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path

from ledgerbank.application.dto import CreateUserRequest
from ledgerbank.application.services import UserService
from ledgerbank.core.dependencies import get_user_service
from ledgerbank.presentation.schemas import (
    CreateUserSchema,
    ErrorResponseSchema,
    UserDetailSchema,
    UserSchema,
)

users_router = APIRouter(
    prefix="/users",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)


@users_router.post(
    "",
    response_model=UserSchema,
    status_code=201,
    summary="Create User",
)
async def create_user(
    request: CreateUserSchema,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserSchema:
    """Sign up a new user with no accounts."""
    response = await user_service.create_user(
        CreateUserRequest(name=request.name, email=request.email)
    )
    return UserSchema(**asdict(response))


@users_router.get(
    "",
    response_model=List[UserSchema],
    summary="List Users",
)
async def list_users(
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> List[UserSchema]:
    users = await user_service.list_users()
    return [UserSchema(**asdict(u)) for u in users]


@users_router.get(
    "/{user_id}",
    response_model=UserDetailSchema,
    summary="Get User",
    description="Returns the user together with the accounts they own.",
    responses={404: {"model": ErrorResponseSchema, "description": "User not found"}},
)
async def get_user(
    user_id: Annotated[int, Path(ge=1)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserDetailSchema:
    detail = await user_service.get_user(user_id)
    return UserDetailSchema(
        **asdict(detail.user),
        accounts=[asdict(a) for a in detail.accounts],
    )
