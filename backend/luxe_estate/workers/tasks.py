import html
import logging

from luxe_estate.core.config import get_settings
from luxe_estate.services.email import send_email
from luxe_estate.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


def contact_recipient() -> str:
    settings = get_settings()
    return settings.CONTACT_NOTIFICATION_EMAIL or settings.SMTP_FROM_EMAIL


@celery_app.task
def send_contact_notification(name: str, email: str, subject: str, message: str) -> dict:
    """Forward a contact-form submission to the support inbox."""
    to_email = contact_recipient()
    body = f"New message from {name} ({email})\n\nSubject: {subject}\nMessage:\n{message}\n"
    body_html = (
        "<h3>New Contact Inquiry</h3>"
        f'<p><strong>From:</strong> {html.escape(name)} (<a href="mailto:{html.escape(email)}">{html.escape(email)}</a>)</p>'
        f"<p><strong>Subject:</strong> {html.escape(subject)}</p>"
        '<div style="background-color: #f3f4f6; padding: 15px; border-radius: 5px; margin: 10px 0;">'
        f"<p>{html.escape(message).replace(chr(10), '<br>')}</p>"
        "</div>"
    )
    send_email(to_email, f"New Contact Inquiry: {subject}", body, html=body_html)
    logger.info("Contact notification for %s forwarded to %s", email, to_email)
    return {"status": "sent", "to": to_email}
