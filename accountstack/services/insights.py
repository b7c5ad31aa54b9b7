"""Insights and alerts for the insights service"""

import logging
from typing import List

from accountstack.domain.access import require_feature, require_identity, require_owner
from accountstack.domain.exceptions import NotFoundError
from accountstack.domain.models import Alert, EntityKind, Insight
from accountstack.domain.shaping import shape_insight
from accountstack.features.flags import ALERTS_ENABLED, FeatureFlags
from accountstack.infrastructure.memory.repository import InMemoryRepository

logger = logging.getLogger(__name__)


class InsightsService:
    """Business logic for insights, applying the V2 algorithm when enabled"""

    def __init__(self, repo: InMemoryRepository, flags: FeatureFlags):
        self.repo = repo
        self.flags = flags

    def list_insights(self, user_id: str) -> List[Insight]:
        require_identity(user_id)
        insights = self.repo.get_by_user_id(EntityKind.INSIGHT, user_id)
        flags = self.flags.snapshot()
        return [shape_insight(insight, flags) for insight in insights]

    def get_insight(self, user_id: str, insight_id: str) -> Insight:
        """
        Raises:
            NotFoundError: No insight with this id
            ForbiddenError: The insight belongs to another user
        """
        require_identity(user_id)
        insight = self.repo.get(EntityKind.INSIGHT, insight_id)
        if insight is None:
            logger.warning("Insight not found", extra={"insight_id": insight_id, "user_id": user_id})
            raise NotFoundError("insight", insight_id)

        require_owner("insight", insight_id, insight.user_id, user_id)
        return shape_insight(insight, self.flags.snapshot())


class AlertsService:
    """Business logic for alerts, gated by the alerts_enabled flag"""

    def __init__(self, repo: InMemoryRepository, flags: FeatureFlags):
        self.repo = repo
        self.flags = flags

    def list_alerts(self, user_id: str) -> List[Alert]:
        """
        Raises:
            FeatureDisabledError: Alerts are switched off; the repository is not consulted
        """
        require_feature(self.flags, ALERTS_ENABLED, "Alerts feature is currently disabled")
        require_identity(user_id)

        alerts = self.repo.get_by_user_id(EntityKind.ALERT, user_id)
        logger.debug("Retrieved alerts for user", extra={"user_id": user_id, "alert_count": len(alerts)})
        return alerts
