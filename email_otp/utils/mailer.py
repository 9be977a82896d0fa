import smtplib
from email.mime.text import MIMEText
from typing import Optional

from loguru import logger

from email_otp.core.config import settings


def build_message(to_email: str, subject: str, body: str, sender: Optional[str] = None) -> MIMEText:
    """Build a plain-text message addressed to a single recipient."""
    msg = MIMEText(body, "plain", "utf-8")
    msg["From"] = sender if sender is not None else settings.SMTP_FROM
    msg["To"] = to_email
    msg["Subject"] = subject
    return msg


def send_email(to_email: str, subject: str, body: str) -> bool:
    """
    Send email using SMTP.
    Supports both authenticated and unauthenticated SMTP.

    Returns True when the server accepted the message, False otherwise.
    Failures are logged, never raised.
    """
    try:
        logger.info(f"Attempting to send email to {to_email}")
        logger.debug(f"SMTP Config - Host: {settings.SMTP_HOST}, Port: {settings.SMTP_PORT}, From: {settings.SMTP_FROM}")

        msg = build_message(to_email, subject, body)

        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
            logger.debug(f"Connected to SMTP server {settings.SMTP_HOST}:{settings.SMTP_PORT}")

            # STARTTLS only on the submission port
            if settings.SMTP_PORT == 587:
                try:
                    server.starttls()
                    logger.debug("STARTTLS connection established")
                except smtplib.SMTPException as e:
                    logger.warning(f"STARTTLS not available: {e}")

            if settings.SMTP_USER and settings.SMTP_PASSWORD:
                try:
                    server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                    logger.info(f"Successfully authenticated as {settings.SMTP_USER}")
                except smtplib.SMTPNotSupportedError:
                    logger.debug("SMTP AUTH extension not supported by server, continuing without authentication")
            else:
                logger.warning("No SMTP credentials provided, attempting unauthenticated send")

            server.sendmail(settings.SMTP_FROM, [to_email], msg.as_string())
            logger.info(f"Email sent successfully to {to_email}")

    except (smtplib.SMTPException, OSError) as e:
        logger.opt(exception=e).error(f"Failed to send email to {to_email}: {type(e).__name__} - {e}")
        return False

    return True
