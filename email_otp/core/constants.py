"""
Status messages returned by the OTP service.

The strings are shown to end users as-is, so they must not change.
"""

from enum import Enum


class EmailStatus(str, Enum):
    """Outcomes of an OTP request."""
    EMAIL_SENT_OK = "Email containing OTP has been sent successfully"
    EMAIL_SEND_FAILED = "Email does not exist or sending to the email has failed"
    EMAIL_INVALID = "Email is invalid"


class OtpStatus(str, Enum):
    """Outcomes of an OTP verification."""
    OTP_OK = "OTP is valid and checked"
    EMAIL_INVALID = "Email is invalid"
    OTP_INVALID = "OTP is invalid"
    OTP_TOO_MANY_TRIES = "OTP is wrong after 10 tries"
    OTP_TIMEOUT = "Timeout after 1 min"
