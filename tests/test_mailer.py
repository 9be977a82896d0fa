import smtplib

import pytest

from email_otp.core.config import settings
from email_otp.utils import mailer


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def sendmail(self, sender, recipients, message):
        self.sent.append((sender, recipients, message))


class RefusingSMTP(FakeSMTP):
    def sendmail(self, sender, recipients, message):
        raise smtplib.SMTPRecipientsRefused({recipients[0]: (550, b"no such user")})


@pytest.fixture(autouse=True)
def smtp_settings(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.test")
    monkeypatch.setattr(settings, "SMTP_PORT", 587)
    monkeypatch.setattr(settings, "SMTP_USER", "otp")
    monkeypatch.setattr(settings, "SMTP_PASSWORD", "secret")
    monkeypatch.setattr(settings, "SMTP_FROM", "no-reply@dso.org.sg")


def test_send_email_delivers_plain_text(monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)

    assert mailer.send_email("a@x.dso.org.sg", "Your OTP code", "Your OTP code is 123456.") is True

    server = FakeSMTP.instances[0]
    assert (server.host, server.port) == ("smtp.test", 587)
    assert server.started_tls
    assert server.logged_in == ("otp", "secret")
    sender, recipients, message = server.sent[0]
    assert sender == "no-reply@dso.org.sg"
    assert recipients == ["a@x.dso.org.sg"]
    assert "Subject: Your OTP code" in message


def test_send_email_skips_login_without_credentials(monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(settings, "SMTP_PORT", 25)
    monkeypatch.setattr(settings, "SMTP_PASSWORD", "")

    assert mailer.send_email("a@x.dso.org.sg", "s", "b") is True

    server = FakeSMTP.instances[0]
    assert not server.started_tls
    assert server.logged_in is None


def test_send_email_reports_failure(monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", RefusingSMTP)

    assert mailer.send_email("a@x.dso.org.sg", "s", "b") is False


def test_send_email_reports_connection_error(monkeypatch):
    def unreachable(*args, **kwargs):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr(mailer.smtplib, "SMTP", unreachable)

    assert mailer.send_email("a@x.dso.org.sg", "s", "b") is False


def test_build_message_headers():
    msg = mailer.build_message("a@x.dso.org.sg", "Subject line", "body", sender="from@dso.org.sg")

    assert msg["To"] == "a@x.dso.org.sg"
    assert msg["From"] == "from@dso.org.sg"
    assert msg["Subject"] == "Subject line"
