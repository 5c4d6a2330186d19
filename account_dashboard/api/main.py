"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from account_dashboard.api.dependencies import get_gateway
from account_dashboard.api.middleware import RequestIDMiddleware, MetricsMiddleware
from account_dashboard.api.v1 import accounts, backup, dashboard, manager
from account_dashboard.infrastructure.observability.logging import setup_logging
from account_dashboard.infrastructure.storage.repositories import AccountRepository, CAMRepository
from account_dashboard.infrastructure.storage.seed import initialize_sample_data
from account_dashboard.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed the demonstration dataset on first run"""
    if settings.seed_sample_data:
        gateway = get_gateway()
        initialize_sample_data(AccountRepository(gateway), CAMRepository(gateway))
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Account Dashboard",
        description="Collections account tracking, decision history and team-lead review",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(accounts.router, prefix="/v1", tags=["accounts"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(manager.router, prefix="/v1", tags=["manager"])
    app.include_router(backup.router, prefix="/v1", tags=["backup"])

    return app


app = create_app()
