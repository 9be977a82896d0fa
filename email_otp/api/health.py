"""
Health check and utility routes.
"""

from fastapi import APIRouter, Depends
from datetime import datetime
from email_otp.core.config import settings
from email_otp.models.schemas import HealthResponse
from email_otp.services.otp import OtpAuthService, get_otp_service

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check endpoint")
async def health_check(otp_service: OtpAuthService = Depends(get_otp_service)) -> HealthResponse:
    """
    Check the health status of the service.

    **Response:**
    - `status`: Service status
    - `version`: API version
    - `pending_challenges`: Number of OTPs waiting for verification
    - `timestamp`: Response timestamp
    """
    return HealthResponse(
        status="healthy",
        version="1.0.0",
        pending_challenges=otp_service.pending_count,
        timestamp=datetime.now()
    )


@router.get("/config", summary="Get API configuration")
async def get_config():
    """Get current API configuration (safe values only)."""
    return {
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "server": {
            "host": settings.SERVER_HOST,
            "port": settings.SERVER_PORT
        },
        "otp": {
            "allowed_domain": settings.OTP_ALLOWED_DOMAIN,
            "notifier_backend": settings.NOTIFIER_BACKEND
        }
    }
