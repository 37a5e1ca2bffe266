"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lms_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lms_gateway.api.v1 import auth
from lms_gateway.infrastructure.database.models import Base
from lms_gateway.infrastructure.database.session import engine
from lms_gateway.infrastructure.observability.logging import setup_logging
from lms_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(init_schema: bool = True) -> FastAPI:
    """Create and configure FastAPI application"""
    if init_schema:
        # No migration tooling; create missing tables on startup
        Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="LMS Gateway",
        description="Lender onboarding and token-based authentication service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "environment": settings.environment}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(auth.router, prefix="/v1", tags=["auth"])

    return app
