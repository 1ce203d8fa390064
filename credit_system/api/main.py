"""FastAPI application factory"""

import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_system.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_system.api.v1 import credits, customers
from credit_system.api.v1.schemas import ExceptionDetails
from credit_system.domain.exceptions import DomainValidationError, InvariantViolationError, NotFoundError
from credit_system.infrastructure.observability.logging import setup_logging
from credit_system.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def _exception_details(status: int, title: str, exc: Exception, details: dict) -> JSONResponse:
    body = ExceptionDetails(
        title=title,
        timestamp=datetime.now(timezone.utc),
        status=status,
        exception=type(exc).__name__,
        details=details,
    )
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


async def handle_validation_error(request: Request, exc: DomainValidationError) -> JSONResponse:
    return _exception_details(400, "Bad Request! Consult the documentation", exc, exc.errors)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _exception_details(404, "Not Found! Consult the documentation", exc, {"message": str(exc)})


async def handle_invariant_violation(request: Request, exc: InvariantViolationError) -> JSONResponse:
    return _exception_details(400, "Bad Request! Consult the documentation", exc, {"message": str(exc)})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logging.error(f"Unexpected error: {exc}", extra={"request_id": getattr(request.state, "request_id", "unknown")})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Application System",
        description="Customer registration and credit application service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainValidationError, handle_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(InvariantViolationError, handle_invariant_violation)
    app.add_exception_handler(Exception, handle_unexpected_error)

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
    app.include_router(credits.router, prefix="/v1", tags=["credits"])

    return app


app = create_app()
