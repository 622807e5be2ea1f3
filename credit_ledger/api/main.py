"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_ledger.api.errors import register_exception_handlers
from credit_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_ledger.api.v1 import customers, loans, repayments, portfolio
from credit_ledger.infrastructure.observability.logging import setup_logging
from credit_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Ledger",
        description="Shopkeeper credit sales, repayments and portfolio summaries",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(customers.router, prefix="/v1", tags=["customers"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(repayments.router, prefix="/v1", tags=["repayments"])
    app.include_router(portfolio.router, prefix="/v1", tags=["portfolio"])

    return app


app = create_app()
