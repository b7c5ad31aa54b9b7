"""FastAPI application factory

Run one or more services with, for example:
    SERVICES=insights uvicorn accountstack.api.main:create_app --factory
"""

import logging
from typing import Optional

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from accountstack.api.dependencies import ServiceContainer
from accountstack.api.errors import register_exception_handlers
from accountstack.api.middleware import RequestIDMiddleware, MetricsMiddleware
from accountstack.api.routes import accounts, admin, insights, transactions
from accountstack.config import Settings, settings as default_settings
from accountstack.features.flags import FeatureFlags
from accountstack.infrastructure.auth.passwords import hash_password
from accountstack.infrastructure.memory.repository import InMemoryRepository
from accountstack.infrastructure.observability.logging import setup_logging
from accountstack.infrastructure.snapshot.loader import load_snapshot

logger = logging.getLogger(__name__)

SERVICE_ROUTERS = {
    "accounts": accounts.router,
    "transactions": transactions.router,
    "insights": insights.router,
}

# Snapshot files each service needs
SERVICE_SNAPSHOT_KINDS = {
    "accounts": ("users", "accounts"),
    "transactions": ("accounts", "transactions"),
    "insights": ("insights",),
}


def snapshot_kinds_for(services) -> tuple:
    kinds = []
    for service in services:
        for kind in SERVICE_SNAPSHOT_KINDS[service]:
            if kind not in kinds:
                kinds.append(kind)
    return tuple(kinds)


def create_app(
    settings: Optional[Settings] = None,
    repo: Optional[InMemoryRepository] = None,
    flags: Optional[FeatureFlags] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Without an explicit repository the snapshot under settings.data_path is
    loaded now; a missing or malformed snapshot aborts startup.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    services = settings.enabled_services
    unknown = [name for name in services if name not in SERVICE_ROUTERS]
    if unknown:
        raise ValueError(f"Unknown services: {', '.join(unknown)}")

    if repo is None:
        repo = InMemoryRepository.from_snapshot(load_snapshot(settings.data_path, snapshot_kinds_for(services)))
    if flags is None:
        flags = FeatureFlags.from_settings(settings)

    password_hash = None
    if "accounts" in services:
        password_hash = hash_password(settings.auth_password, rounds=settings.bcrypt_rounds)

    app = FastAPI(
        title="AccountStack API",
        description="Read-only accounts, transactions and insights service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.container = ServiceContainer.build(settings, repo, flags, password_hash)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/healthz")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "services": services}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    for name in services:
        app.include_router(SERVICE_ROUTERS[name], tags=[name])
    app.include_router(admin.router, tags=["admin"])

    logger.info("Service started", extra={"services": services, "flags": flags.snapshot()})
    return app
