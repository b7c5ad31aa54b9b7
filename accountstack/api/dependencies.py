"""Dependency injection for FastAPI endpoints"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from accountstack.config import Settings
from accountstack.domain.exceptions import UnauthenticatedError
from accountstack.features.flags import FeatureFlags
from accountstack.infrastructure.auth.jwt import TokenError, decode_token
from accountstack.infrastructure.memory.repository import InMemoryRepository
from accountstack.services.accounts import AccountService, UserService
from accountstack.services.insights import AlertsService, InsightsService
from accountstack.services.transactions import TransactionService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything a request handler needs, built once per application"""

    settings: Settings
    repo: InMemoryRepository
    flags: FeatureFlags
    users: UserService
    accounts: AccountService
    transactions: TransactionService
    insights: InsightsService
    alerts: AlertsService
    password_hash: Optional[str] = None

    @classmethod
    def build(
        cls,
        settings: Settings,
        repo: InMemoryRepository,
        flags: FeatureFlags,
        password_hash: Optional[str] = None,
    ) -> "ServiceContainer":
        return cls(
            settings=settings,
            repo=repo,
            flags=flags,
            users=UserService(repo),
            accounts=AccountService(repo, flags),
            transactions=TransactionService(repo, flags),
            insights=InsightsService(repo, flags),
            alerts=AlertsService(repo, flags),
            password_hash=password_hash,
        )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(request: Request) -> str:
    """
    Resolve the caller from a Bearer token.

    Raises:
        UnauthenticatedError: Missing header, wrong scheme, or invalid token
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        logger.warning("No authorization header provided", extra={"request_id": get_request_id(request)})
        raise UnauthenticatedError("Unauthorized")

    scheme, _, token = auth_header.partition(" ")
    if scheme != "Bearer" or not token:
        logger.warning("Invalid authorization header format", extra={"request_id": get_request_id(request)})
        raise UnauthenticatedError("Unauthorized")

    try:
        claims = decode_token(token, get_container(request).settings)
    except TokenError as e:
        logger.warning(f"Invalid token: {e}", extra={"request_id": get_request_id(request)})
        raise UnauthenticatedError("Unauthorized") from e

    request.state.user_id = claims["user_id"]
    return claims["user_id"]
