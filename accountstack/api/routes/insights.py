"""Insights service: GET /insights, GET /insights/{insight_id}, GET /alerts"""

from typing import List

from fastapi import APIRouter, Depends

from accountstack.api.dependencies import ServiceContainer, get_container, get_current_user_id
from accountstack.api.routes.schemas import AlertResponse, InsightResponse

router = APIRouter()


@router.get("/insights", response_model=List[InsightResponse])
def list_insights(
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    return [InsightResponse.from_domain(insight) for insight in container.insights.list_insights(user_id)]


@router.get("/insights/{insight_id}", response_model=InsightResponse)
def get_insight(
    insight_id: str,
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    return InsightResponse.from_domain(container.insights.get_insight(user_id, insight_id))


@router.get("/alerts", response_model=List[AlertResponse])
def list_alerts(
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    """
    List the caller's alerts.

    Returns:
        503 Service Unavailable while the alerts_enabled flag is off
    """
    return [AlertResponse.from_domain(alert) for alert in container.alerts.list_alerts(user_id)]
