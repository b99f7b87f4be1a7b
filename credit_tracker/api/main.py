"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_tracker.api.v1 import payments, purchases, schedule
from credit_tracker.infrastructure.database.session import init_db
from credit_tracker.infrastructure.observability.logging import setup_logging
from credit_tracker.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Create tables on startup"""
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Card Installment Tracker",
        description="Purchase installment plans, monthly payment ledger and derived schedule",
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
    app.include_router(purchases.router, prefix="/v1", tags=["purchases"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])
    app.include_router(schedule.router, prefix="/v1", tags=["schedule"])

    return app


app = create_app()
