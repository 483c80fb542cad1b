"""Main FastAPI Application

Serves the resume PDF proxy route and a health check. This module wires
middleware, global exception handlers, and includes API routers from
`presentation`.

Run locally for development with:

    uvicorn main:app --reload

Keep application logic in `application`, `core`, and
`infrastructure` to preserve a clean architecture.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from core.config import settings
from core.logging_config import configure_logging
from core.exceptions import (
    DomainException,
    AuthenticationException,
    ValidationException,
    ConfigurationException,
    UpstreamUnavailableException,
    CloudSyncException,
    ResumeAPIError,
)
from infrastructure.cache.redis_local_store import local_store
from presentation.api.v1.container import close_container
from presentation.api.v1.endpoints import resume_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    configure_logging()
    logger.info(f"🚀 Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    await local_store.connect()

    yield

    # Shutdown
    logger.info("👋 Shutting down gracefully...")
    await close_container()
    await local_store.disconnect()


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Resume editor sync backend and signed PDF proxy",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_code(exc: DomainException) -> tuple:
    if isinstance(exc, ResumeAPIError):
        return exc.status, exc.code
    if isinstance(exc, AuthenticationException):
        return status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED"
    if isinstance(exc, ValidationException):
        return status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR"
    if isinstance(exc, (UpstreamUnavailableException, CloudSyncException)):
        return status.HTTP_502_BAD_GATEWAY, "BAD_GATEWAY"
    if isinstance(exc, ConfigurationException):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"
    return status.HTTP_400_BAD_REQUEST, "BAD_REQUEST"


# Global Exception Handler
@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    """Handle domain-level exceptions"""
    logger.warning(f"Domain exception: {str(exc)}")

    status_code, code = _error_code(exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": str(exc)}}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler"""
    logger.opt(exception=exc).error(f"Unhandled exception: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}}
    )


@app.get("/health", tags=["Health"])
async def health():
    """Liveness check"""
    return {"status": "ok"}


# Resume endpoint
app.include_router(
    resume_router,
    prefix="/api/v1",
    tags=["Resume"]
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
