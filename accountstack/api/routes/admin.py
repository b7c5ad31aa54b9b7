"""GET/PUT /admin/flags - inspect and update process-local feature flags"""

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header

from accountstack.api.dependencies import ServiceContainer, get_container
from accountstack.api.routes.schemas import FlagsResponse, FlagsUpdate
from accountstack.domain.exceptions import FeatureDisabledError, UnauthenticatedError

router = APIRouter()


def require_admin(
    x_admin_token: Optional[str] = Header(None),
    container: ServiceContainer = Depends(get_container),
) -> None:
    expected = container.settings.admin_token
    if not expected:
        raise FeatureDisabledError("admin", "Flag administration is disabled")
    if not x_admin_token or not hmac.compare_digest(x_admin_token, expected):
        raise UnauthenticatedError("Unauthorized")


@router.get("/admin/flags", response_model=FlagsResponse, dependencies=[Depends(require_admin)])
def get_flags(container: ServiceContainer = Depends(get_container)):
    return FlagsResponse(flags=container.flags.snapshot())


@router.put("/admin/flags", response_model=FlagsResponse, dependencies=[Depends(require_admin)])
def update_flags(body: FlagsUpdate, container: ServiceContainer = Depends(get_container)):
    """Apply every flag in the body atomically and return the resulting state"""
    container.flags.set_many(body.flags)
    return FlagsResponse(flags=container.flags.snapshot())
