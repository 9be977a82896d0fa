"""
Notifiers - deliver OTP messages to an email address.

A notifier is fire-and-forget: `send` returns nothing and the OTP service
never looks at whether delivery worked.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol
from loguru import logger

from email_otp.core.config import Settings
from email_otp.utils.mailer import send_email


class Notifier(Protocol):
    def send(self, address: str, body: str) -> None:
        ...


class LogNotifier:
    """Development notifier: writes the message to the log instead of sending it."""

    def send(self, address: str, body: str) -> None:
        logger.info(f"[DEV] Message for {address}: {body}")


class SmtpNotifier:
    """Sends the message as a plain-text email through the configured SMTP server."""

    def __init__(self, subject: str):
        self.subject = subject

    def send(self, address: str, body: str) -> None:
        if not send_email(address, self.subject, body):
            logger.warning(f"OTP email to {address} was not delivered")


class BackgroundNotifier:
    """
    Runs another notifier on a thread pool.

    `send` only schedules the delivery and returns immediately. Errors
    raised by the wrapped notifier are logged and dropped.
    """

    def __init__(self, delegate: Notifier, max_workers: int = 4):
        self.delegate = delegate
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notifier")

    def send(self, address: str, body: str) -> None:
        future = self._executor.submit(self.delegate.send, address, body)
        future.add_done_callback(lambda f: self._log_failure(f, address))

    @staticmethod
    def _log_failure(future: Future, address: str) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Notification to {address} failed: {type(exc).__name__}")

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and, by default, wait for pending deliveries."""
        self._executor.shutdown(wait=wait)


def build_notifier(settings: Settings) -> BackgroundNotifier:
    """Create the notifier selected by NOTIFIER_BACKEND, wrapped for background delivery."""
    if settings.NOTIFIER_BACKEND == "smtp":
        delegate: Notifier = SmtpNotifier(subject=settings.OTP_EMAIL_SUBJECT)
    else:
        delegate = LogNotifier()
    logger.info(f"Notifier backend: {settings.NOTIFIER_BACKEND}")
    return BackgroundNotifier(delegate, max_workers=settings.NOTIFIER_WORKERS)
