"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Requested entity does not exist"""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.entity_id = entity_id


class ForbiddenError(DomainException):
    """Entity exists but belongs to another user"""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"You do not have access to this {kind}")
        self.kind = kind
        self.entity_id = entity_id


class UnauthenticatedError(DomainException):
    """No caller identity could be resolved from the request"""

    pass


class FeatureDisabledError(DomainException):
    """Capability is switched off by a feature flag"""

    def __init__(self, feature: str, message: str | None = None):
        super().__init__(message or f"Feature '{feature}' is currently disabled")
        self.feature = feature


class InvalidInputError(DomainException):
    """Request parameters are malformed"""

    pass


class InternalError(DomainException):
    """Unexpected repository or transformation fault"""

    pass


class SnapshotLoadError(DomainException):
    """Snapshot data is missing or malformed"""

    pass
