import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from luxe_estate.core.config import get_settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    settings = get_settings()
    return bool(settings.SMTP_HOST and settings.SMTP_USERNAME and settings.SMTP_PASSWORD)


def send_email(to_email: str, subject: str, body: str, html: str | None = None) -> None:
    """Send a message through SMTP; errors from the transport propagate to the caller.

    Without SMTP credentials the message is only logged, which keeps local
    development usable.
    """
    settings = get_settings()
    if not smtp_configured():
        logger.warning("SMTP not configured; simulating email to %s: %s", to_email, subject)
        logger.debug("Simulated email body:\n%s", body)
        return

    msg = EmailMessage()
    msg["From"] = formataddr((settings.SMTP_FROM_NAME, settings.SMTP_FROM_EMAIL))
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(body)
    if html:
        msg.add_alternative(html, subtype="html")

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=20) as server:
        if settings.SMTP_USE_TLS:
            server.starttls()
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.send_message(msg)
    logger.info("Email sent to %s: %s", to_email, subject)
