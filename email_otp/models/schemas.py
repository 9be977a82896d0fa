"""
Pydantic models for API responses.
"""

from pydantic import BaseModel, Field
from datetime import datetime


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    pending_challenges: int = Field(..., description="OTPs waiting for verification")
    timestamp: datetime = Field(..., description="Response timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "pending_challenges": 3,
                "timestamp": "2024-01-15T10:30:00"
            }
        }
