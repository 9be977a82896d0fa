from datetime import datetime, timedelta, timezone

import pytest

from email_otp.services.otp import OtpAuthService

FIXED_CODE = 123456


class FakeClock:
    """Manually advanced clock so expiry can be tested without sleeping."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send(self, address: str, body: str) -> None:
        self.sent.append((address, body))


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def service(clock, notifier):
    return OtpAuthService(
        notifier=notifier,
        allowed_domain=".dso.org.sg",
        code_generator=lambda: FIXED_CODE,
        clock=clock,
    )


@pytest.fixture
def code():
    """The code every request issued by `service` carries."""
    return FIXED_CODE
