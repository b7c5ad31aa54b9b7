"""Unit tests for alert derivation"""

import pytest

from accountstack.domain.alerts import derive_alerts, map_severity_to_priority


@pytest.mark.parametrize(
    "severity, priority",
    [("high", "critical"), ("medium", "high"), ("low", "medium"), ("unknown", "medium")],
)
def test_map_severity_to_priority(severity, priority):
    assert map_severity_to_priority(severity) == priority


def test_high_severity_actionable_insight_becomes_critical_alert(make_insight):
    insight = make_insight("i1", "user-001", severity="high", actionable=True)

    [alert] = derive_alerts([insight])

    assert alert.id == "alert-001"
    assert alert.priority == "critical"
    assert alert.user_id == "user-001"
    assert alert.title == insight.title
    assert alert.message == insight.description
    assert alert.type == insight.type
    assert alert.created_at == insight.created_at
    assert alert.read is False


def test_low_severity_insight_generates_no_alert(make_insight):
    assert derive_alerts([make_insight("i1", "user-001", severity="low", actionable=True)]) == []


def test_non_actionable_insight_generates_no_alert(make_insight):
    assert derive_alerts([make_insight("i1", "user-001", severity="high", actionable=False)]) == []


def test_ids_follow_insight_order(make_insight):
    insights = [
        make_insight("i1", "user-001", severity="medium"),
        make_insight("i2", "user-001", severity="low"),
        make_insight("i3", "user-002", severity="high"),
    ]

    alerts = derive_alerts(insights)

    assert [(a.id, a.user_id, a.priority) for a in alerts] == [
        ("alert-001", "user-001", "high"),
        ("alert-002", "user-002", "critical"),
    ]


def test_derivation_is_deterministic(snapshot):
    first = derive_alerts(snapshot.insights)
    second = derive_alerts(snapshot.insights)

    assert first == second
    assert len(first) == 2
