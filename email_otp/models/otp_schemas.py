from typing import Optional
from pydantic import BaseModel, Field


class OTPRequest(BaseModel):
    email: Optional[str] = Field(default=None, description="Email address to send OTP to")


class OTPVerifyRequest(BaseModel):
    email: str = Field(..., description="Email address the OTP was sent to")
    code: int = Field(..., description="OTP code received by user")


class OTPResponse(BaseModel):
    status: int = Field(..., description="Outcome status, mirrored as the HTTP status code")
    message: str = Field(..., description="Human readable outcome")

    class Config:
        json_schema_extra = {
            "example": {
                "status": 200,
                "message": "Email containing OTP has been sent successfully"
            }
        }
