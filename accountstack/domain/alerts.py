"""Alert derivation from actionable insights"""

from typing import Iterable, List

from accountstack.domain.models import Alert, Insight

ALERT_SEVERITIES = frozenset({"medium", "high"})

SEVERITY_TO_PRIORITY = {
    "high": "critical",
    "medium": "high",
}
DEFAULT_PRIORITY = "medium"


def map_severity_to_priority(severity: str) -> str:
    """Convert insight severity to alert priority"""
    return SEVERITY_TO_PRIORITY.get(severity, DEFAULT_PRIORITY)


def should_alert(insight: Insight) -> bool:
    return insight.actionable and insight.severity in ALERT_SEVERITIES


def derive_alerts(insights: Iterable[Insight]) -> List[Alert]:
    """
    Create one alert per actionable medium/high severity insight.

    Ids are assigned sequentially (alert-001, alert-002, ...) in the order
    the insights are given, so a fixed input order yields fixed ids.
    """
    alerts: List[Alert] = []
    for insight in insights:
        if not should_alert(insight):
            continue
        alerts.append(
            Alert(
                id=f"alert-{len(alerts) + 1:03d}",
                user_id=insight.user_id,
                type=insight.type,
                title=insight.title,
                message=insight.description,
                priority=map_severity_to_priority(insight.severity),
                created_at=insight.created_at,
                read=False,
            )
        )
    return alerts
