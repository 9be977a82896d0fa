"""
Main FastAPI application.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger

from email_otp.core.config import settings
from email_otp.core.logging import setup_logging
from email_otp.api.health import router as health_router
from email_otp.api.otp_routes import router as otp_router
from email_otp.services.otp import get_otp_service, shutdown_otp_service

# Setup logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown.
    """
    # Startup
    logger.info("=" * 50)
    logger.info("Starting Email OTP API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug: {settings.DEBUG}")
    logger.info(f"Allowed domain: {settings.OTP_ALLOWED_DOMAIN}")
    logger.info("=" * 50)

    get_otp_service()

    yield

    # Shutdown
    shutdown_otp_service()
    logger.info("=" * 50)
    logger.info("Shutting down Email OTP API")
    logger.info("=" * 50)


# Create FastAPI app
app = FastAPI(
    title="Email OTP API",
    description="Issues and verifies one-time passcodes sent by email",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(otp_router)
app.include_router(health_router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Email OTP API",
        "docs": "/api/docs",
        "version": "1.0.0"
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.SERVER_HOST}:{settings.SERVER_PORT}")

    uvicorn.run(
        "email_otp.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
