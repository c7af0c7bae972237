"""
FastAPI Application Entry Point

Bistro Boss ordering API: users, menu, reviews, carts and payments over
MongoDB, with bearer-token auth and an admin role gate.

Endpoints:
    - POST /jwt: Issue a bearer token
    - /users, /menu, /reviews, /carts: Resource CRUD
    - POST /create-payment-intent, /payments: Checkout
    - GET /admin-stats, /order-stats: Admin reports
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from bson.errors import InvalidId
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError

from bistro.core.config import get_settings, setup_logging
from bistro.core.errors import BistroError, UpstreamFault
from bistro.database import connect, get_db, init_db
from bistro.routers import all_routers
from bistro.services.payment import BasePaymentService, get_payment_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    client = connect(settings)
    app.state.db = client[settings.database_name]
    init_db(app.state.db)
    logger.info("✅ Database initialized")

    payment_service = get_payment_service()
    logger.info(f"✅ Payment Service: {payment_service.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    client.close()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Restaurant ordering backend: menu catalog, carts and payments "
        "with bearer-token authentication and an admin role."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in all_routers:
    app.include_router(router)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", response_class=PlainTextResponse, tags=["Root"])
async def root() -> str:
    """Liveness string."""
    return "Bistro Boss server is running!"


@app.get("/health", tags=["Health"], summary="System Health Check")
async def health_check(
    db: Database = Depends(get_db),
    payment_service: BasePaymentService = Depends(get_payment_service),
) -> dict[str, Any]:
    """Verify the database and payment provider are reachable."""

    db_status = "healthy"
    try:
        db.command("ping")
    except PyMongoError as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    payment_status = "healthy" if await payment_service.health_check() else "unhealthy"

    overall = "operational" if all(
        s == "healthy" for s in [db_status, payment_status]
    ) else "degraded"

    return {
        "status": overall,
        "database": db_status,
        "payment": payment_status,
        "payment_provider": payment_service.provider_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def error_envelope(message: str, status_code: int) -> JSONResponse:
    """
    Body for store and provider faults.

    Existing clients read ``error`` from a 200 response; LEGACY_ERROR_ENVELOPE
    controls whether the real status code is sent instead.
    """
    if get_settings().legacy_error_envelope:
        status_code = 200
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message},
    )


@app.exception_handler(BistroError)
async def bistro_error_handler(request: Request, exc: BistroError) -> JSONResponse:
    """Authentication and authorization failures."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(UpstreamFault)
async def upstream_fault_handler(request: Request, exc: UpstreamFault) -> JSONResponse:
    logger.error(f"Upstream fault on {request.method} {request.url.path}: {exc.message}")
    return error_envelope(exc.message, exc.status_code)


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return error_envelope(str(exc), 502)


@app.exception_handler(InvalidId)
async def invalid_id_handler(request: Request, exc: InvalidId) -> JSONResponse:
    logger.info(f"Invalid id on {request.method} {request.url.path}: {exc}")
    return error_envelope(str(exc), 400)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bistro.main:app", host=settings.api_host, port=settings.api_port)
