"""Access-control checks shared by every service"""

import logging

from accountstack.domain.exceptions import FeatureDisabledError, ForbiddenError, UnauthenticatedError
from accountstack.features.flags import FeatureFlags
from accountstack.infrastructure.observability.metrics import record_access_denied, record_feature_disabled

logger = logging.getLogger(__name__)


def require_identity(user_id: str | None) -> str:
    if not user_id:
        raise UnauthenticatedError("Unauthorized")
    return user_id


def require_owner(kind: str, entity_id: str, owner_id: str, caller_id: str) -> None:
    """Raise ForbiddenError unless the caller owns the entity"""
    if owner_id == caller_id:
        return
    record_access_denied(kind)
    logger.warning(
        "Unauthorized access attempt",
        extra={f"{kind}_id": entity_id, "user_id": caller_id, "owner_id": owner_id},
    )
    raise ForbiddenError(kind, entity_id)


def require_feature(flags: FeatureFlags, name: str, message: str | None = None) -> None:
    """Fail fast when a feature-gated capability is switched off"""
    if flags.is_enabled(name):
        return
    record_feature_disabled(name)
    logger.warning("Feature-gated endpoint accessed while disabled", extra={"feature": name})
    raise FeatureDisabledError(name, message)
