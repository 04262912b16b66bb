"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from tidy_pricing.api.middleware import RequestIDMiddleware, MetricsMiddleware
from tidy_pricing.api.v1 import cancellations, pricing, quotes, settlements
from tidy_pricing.infrastructure.observability.logging import setup_logging
from tidy_pricing.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Tidy Pricing Gateway",
        description="Quotes, provider settlements and cancellation outcomes for cleaning jobs",
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
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(pricing.router, prefix="/v1", tags=["pricing"])
    app.include_router(quotes.router, prefix="/v1", tags=["quotes"])
    app.include_router(settlements.router, prefix="/v1", tags=["settlements"])
    app.include_router(cancellations.router, prefix="/v1", tags=["cancellations"])

    return app


app = create_app()
