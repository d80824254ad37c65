import logging

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_auth_requests
from google.oauth2 import id_token as google_id_token

from luxe_estate.core.config import get_settings

logger = logging.getLogger(__name__)


class GoogleTokenError(Exception):
    pass


def verify_google_credential(credential: str) -> dict:
    """Verify a Google Sign-In ID token and return its claims."""
    settings = get_settings()
    if not settings.GOOGLE_CLIENT_ID:
        raise GoogleTokenError("Google sign-in is not configured")
    token = (credential or "").strip()
    if not token:
        raise GoogleTokenError("Missing credential")
    try:
        info = google_id_token.verify_oauth2_token(
            token,
            google_auth_requests.Request(),
            audience=settings.GOOGLE_CLIENT_ID,
        )
    except (ValueError, GoogleAuthError) as exc:
        logger.warning("Google verify_oauth2_token failed: %s", exc)
        raise GoogleTokenError(str(exc)) from exc

    if not info.get("email"):
        raise GoogleTokenError("Google token missing email")
    if info.get("email_verified") is False:
        raise GoogleTokenError("Google email is not verified")
    return info
