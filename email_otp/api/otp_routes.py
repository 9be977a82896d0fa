
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from email_otp.models.otp_schemas import OTPRequest, OTPVerifyRequest, OTPResponse
from email_otp.services.otp import OtpAuthService, OtpResult, get_otp_service

router = APIRouter(prefix="/otp", tags=["otp"])


def _to_response(result: OtpResult) -> JSONResponse:
    body = OTPResponse(status=result.status, message=result.message)
    return JSONResponse(status_code=result.status, content=body.model_dump())


@router.post("/request", response_model=OTPResponse)
def request_otp(
    request: OTPRequest,
    otp_service: OtpAuthService = Depends(get_otp_service)
):
    """
    Generate an OTP and email it.

    - `200`: email sent
    - `422`: email missing, or its domain is not allowed
    """
    return _to_response(otp_service.request_otp(request.email))


@router.post("/verify", response_model=OTPResponse)
def verify_otp(
    request: OTPVerifyRequest,
    otp_service: OtpAuthService = Depends(get_otp_service)
):
    """
    Check an OTP previously sent to `email`.

    - `200`: OTP valid, challenge consumed
    - `408`: more than 1 minute since the OTP was issued
    - `422`: no pending OTP for the email, or wrong code
    - `429`: too many wrong codes
    """
    return _to_response(otp_service.verify_otp(request.email, request.code))
