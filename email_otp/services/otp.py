"""
OTP service - issues and verifies email one-time passcodes.
"""

import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional
from loguru import logger

from email_otp.core.config import settings
from email_otp.core.constants import EmailStatus, OtpStatus
from email_otp.services.notifier import Notifier, build_notifier
from email_otp.utils.locks import KeyedLock


@dataclass(frozen=True)
class Challenge:
    """Pending verification for one email address."""
    email: str
    code: int
    attempts: int
    created_at: datetime


@dataclass(frozen=True)
class OtpResult:
    status: int
    message: str


def generate_code() -> int:
    """Uniformly random 6-digit code in [100000, 999999]."""
    return 100000 + secrets.randbelow(900000)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OtpAuthService:
    """Handles OTP issuance and verification against an in-memory store."""

    def __init__(
        self,
        notifier: Notifier,
        allowed_domain: str = ".dso.org.sg",
        ttl: timedelta = timedelta(minutes=1),
        max_attempts: int = 10,
        code_generator: Callable[[], int] = generate_code,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            notifier: delivers the message carrying the code
            allowed_domain: suffix the domain part of an email must contain
            ttl: lifetime of a challenge, measured from its creation
            max_attempts: mismatches tolerated before the challenge is dropped
            code_generator: returns a new numeric code
            clock: returns the current time
        """
        self.notifier = notifier
        self.allowed_domain = allowed_domain
        self.ttl = ttl
        self.max_attempts = max_attempts
        self._generate_code = code_generator
        self._now = clock
        self._challenges: Dict[str, Challenge] = {}
        self._locks = KeyedLock()

    def request_otp(self, email: Optional[str]) -> OtpResult:
        """
        Generate a code for `email`, send it and open a challenge.

        Any live challenge for the same email is replaced.
        """
        if not email:
            return OtpResult(422, EmailStatus.EMAIL_INVALID.value)

        if not self._is_allowed_domain(email):
            logger.warning(f"OTP request rejected for {email}: domain not allowed")
            return OtpResult(422, EmailStatus.EMAIL_SEND_FAILED.value)

        code = self._generate_code()
        body = f"Your OTP code is {code}. The code is valid for 1 minute."

        with self._locks.hold(email):
            self._notify(email, body)
            self._challenges[email] = Challenge(
                email=email,
                code=code,
                attempts=1,
                created_at=self._now(),
            )

        logger.info(f"OTP issued for {email}")
        return OtpResult(200, EmailStatus.EMAIL_SENT_OK.value)

    def verify_otp(self, email: str, code: int) -> OtpResult:
        """
        Check `code` against the live challenge for `email`.

        Expiry and the attempt budget are checked before the code itself,
        so a correct code cannot rescue an expired or exhausted challenge.
        """
        with self._locks.hold(email):
            challenge = self._challenges.get(email)

            if challenge is None:
                return OtpResult(422, OtpStatus.EMAIL_INVALID.value)

            if self._now() > challenge.created_at + self.ttl:
                del self._challenges[email]
                logger.info(f"OTP expired for {email}")
                return OtpResult(408, OtpStatus.OTP_TIMEOUT.value)

            if challenge.attempts > self.max_attempts:
                del self._challenges[email]
                logger.warning(f"OTP attempts exhausted for {email}")
                return OtpResult(429, OtpStatus.OTP_TOO_MANY_TRIES.value)

            if code != challenge.code:
                self._challenges[email] = replace(challenge, attempts=challenge.attempts + 1)
                logger.info(f"OTP mismatch for {email} (failed attempts: {challenge.attempts})")
                return OtpResult(422, OtpStatus.OTP_INVALID.value)

            del self._challenges[email]

        logger.info(f"OTP verified for {email}")
        return OtpResult(200, OtpStatus.OTP_OK.value)

    def pending(self, email: str) -> Optional[Challenge]:
        """Snapshot of the live challenge for `email`, if any."""
        with self._locks.hold(email):
            return self._challenges.get(email)

    @property
    def pending_count(self) -> int:
        return len(self._challenges)

    def _is_allowed_domain(self, email: str) -> bool:
        domain = email.split("@")[-1]
        return self.allowed_domain in domain

    def _notify(self, email: str, body: str) -> None:
        try:
            self.notifier.send(email, body)
        except Exception as e:
            # notifier errors never change the result
            logger.opt(exception=e).error(f"Notifier failed for {email}: {type(e).__name__}")


# Singleton instance
_otp_service = None


def get_otp_service() -> OtpAuthService:
    """Get or create the OTP service instance."""
    global _otp_service
    if _otp_service is None:
        _otp_service = OtpAuthService(
            notifier=build_notifier(settings),
            allowed_domain=settings.OTP_ALLOWED_DOMAIN,
        )
        logger.info(f"OTP service initialized (allowed domain: {settings.OTP_ALLOWED_DOMAIN})")
    return _otp_service


def shutdown_otp_service() -> None:
    """Release the notifier of the singleton, if one was created."""
    global _otp_service
    if _otp_service is None:
        return
    shutdown = getattr(_otp_service.notifier, "shutdown", None)
    if shutdown is not None:
        shutdown()
    _otp_service = None
