# ================================
# MAIN APPLICATION (main.py)
# ================================

from datetime import datetime, timezone
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager
from sqlalchemy import text

# Core imports
from campus_storage.config import settings
from campus_storage.core.database import engine
from campus_storage.core.exceptions import AppException
from campus_storage.core.middleware import (
    RequestContextMiddleware,
    AuditMiddleware,
    SecurityHeadersMiddleware
)
from campus_storage.api import API_DESCRIPTION
from campus_storage.schemas.base import ErrorResponse, HealthCheckResponse

# API Routes
from campus_storage.api.v1 import profiles, listings, bookings

import logging
import uvicorn

# ================================
# LOGGING CONFIGURATION
# ================================

logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ================================
# APPLICATION LIFECYCLE
# ================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""

    # Startup
    logger.info(f"Starting {settings.APP_NAME}")
    await run_startup_health_checks()

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")
    engine.dispose()

async def run_startup_health_checks():
    """The database is reachable; the schema is owned by the hosted database"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        logger.info("Database connection established")

    except Exception as e:
        logger.error(f"Startup health check failed: {e}")
        raise

# ================================
# FASTAPI APPLICATION
# ================================

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=API_DESCRIPTION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

# ================================
# MIDDLEWARE CONFIGURATION
# ================================

# Security Headers
app.add_middleware(SecurityHeadersMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time"]
)

# Audit Logging
app.add_middleware(AuditMiddleware)

# Request context and DB session (last middleware, runs first)
app.add_middleware(RequestContextMiddleware)

# ================================
# EXCEPTION HANDLERS
# ================================

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Application errors carry their own status and error code"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.detail}", exc_info=exc.__cause__)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            detail=exc.detail,
            error_code=exc.error_code,
            request_id=getattr(request.state, "request_id", None)
        ).model_dump()
    )

@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters use the application error shape"""
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            detail="; ".join(messages) or "Invalid request",
            error_code="VALIDATION_ERROR",
            request_id=getattr(request.state, "request_id", None)
        ).model_dump()
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "request_id": getattr(request.state, "request_id", None)
        }
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handler for unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error" if not settings.DEBUG else str(exc),
            "error_code": "INTERNAL_ERROR",
            "request_id": getattr(request.state, "request_id", None)
        }
    )

# ================================
# HEALTH CHECK ENDPOINTS
# ================================

@app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION
    }

@app.get("/health/detailed", response_model=HealthCheckResponse, tags=["Health"])
async def detailed_health_check():
    """Health check including the database"""
    health_status = {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        health_status["checks"]["database"] = "healthy"
    except Exception:
        health_status["checks"]["database"] = "unhealthy"
        health_status["status"] = "degraded"

    return health_status

# ================================
# API ROUTES
# ================================

app.include_router(
    profiles.router,
    prefix="/api/v1/profiles",
    tags=["Profiles"],
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "Profile not found"}
    }
)

app.include_router(
    listings.router,
    prefix="/api/v1/listings",
    tags=["Storage Spaces"],
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Only the host may change a storage space"},
        404: {"description": "Storage space not found"}
    }
)

app.include_router(
    bookings.router,
    prefix="/api/v1/bookings",
    tags=["Bookings"],
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not a party to the booking"},
        404: {"description": "Booking not found"},
        409: {"description": "Status transition or date conflict"}
    }
)

# ================================
# ROOT ENDPOINT
# ================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs_url": "/docs" if settings.DEBUG else None,
        "health_url": "/health",
        "available_endpoints": {
            "profiles": "/api/v1/profiles",
            "listings": "/api/v1/listings",
            "bookings": "/api/v1/bookings"
        }
    }

# ================================
# CUSTOM OPENAPI SCHEMA
# ================================

def custom_openapi():
    """OpenAPI schema with the bearer security scheme"""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=API_DESCRIPTION,
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Identity provider access token"
        }
    }

    # Public endpoints stay without security
    for path, path_item in openapi_schema["paths"].items():
        if path in ["/", "/health", "/health/detailed"]:
            continue

        for method, operation in path_item.items():
            if method in ["get", "post", "delete", "patch"]:
                operation["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

# ================================
# DEVELOPMENT SERVER
# ================================

if __name__ == "__main__":
    uvicorn.run(
        "campus_storage.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True
    )
