"""Accounts service: POST /login, GET /me, GET /accounts, GET /accounts/{account_id}"""

import logging
import time
from typing import List

from fastapi import APIRouter, Depends, Request

from accountstack.api.dependencies import ServiceContainer, get_container, get_current_user_id, get_request_id
from accountstack.api.routes.schemas import AccountResponse, LoginRequest, LoginResponse, LoginUser, UserResponse
from accountstack.domain.exceptions import UnauthenticatedError
from accountstack.infrastructure.auth.jwt import create_access_token
from accountstack.infrastructure.auth.passwords import verify_password
from accountstack.infrastructure.observability.logging import log_request_outcome

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, container: ServiceContainer = Depends(get_container)):
    """
    Exchange an email and the shared demo password for a bearer token.

    Unknown users and wrong passwords get the same 401 response.
    """
    user = container.users.find_by_email(body.username)
    if user is None:
        logger.warning("User not found", extra={"username": body.username})
        raise UnauthenticatedError("Invalid credentials")

    if not container.password_hash or not verify_password(body.password, container.password_hash):
        logger.warning("Invalid password", extra={"username": body.username})
        raise UnauthenticatedError("Invalid credentials")

    token = create_access_token(user.id, user.email, container.settings)
    logger.info("User logged in successfully", extra={"user_id": user.id})

    return LoginResponse(
        token=token,
        expires_in=container.settings.jwt_expire_minutes * 60,
        user=LoginUser(id=user.id, email=user.email, name=user.name),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    """Return the authenticated user's profile"""
    return UserResponse.from_domain(container.users.get_user(user_id))


@router.get("/accounts", response_model=List[AccountResponse])
def list_accounts(
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    """
    List the caller's accounts.

    Balances are masked and currency localised according to feature flags.
    """
    return [AccountResponse.from_view(view) for view in container.accounts.list_accounts(user_id)]


@router.get("/accounts/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    """
    Fetch one account.

    Returns:
        403 when the account belongs to another user, 404 when it does not exist
    """
    start_time = time.time()
    view = container.accounts.get_account(user_id, account_id)
    log_request_outcome(
        get_request_id(request),
        user_id,
        operation="get_account",
        outcome="ok",
        duration_ms=(time.time() - start_time) * 1000,
        account_id=account_id,
    )
    return AccountResponse.from_view(view)
