import re
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from luxe_estate.core.config import get_settings

pwd_context = CryptContext(schemes=["argon2", "bcrypt"], deprecated="auto")
PASSWORD_RE = re.compile(r"^\S.{4,126}\S$")
WEAK_PASSWORD_DETAIL = "Password must be 6-128 characters without leading or trailing spaces."

ACCESS = "access"
REFRESH = "refresh"


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def validate_password_strength(password: str) -> bool:
    return bool(PASSWORD_RE.match(password))


def _secret_for(token_type: str) -> str:
    settings = get_settings()
    return settings.JWT_REFRESH_SECRET if token_type == REFRESH else settings.JWT_ACCESS_SECRET


def _encode(subject: str, token_type: str, expires_delta: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "typ": token_type,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "nbf": now,
        "exp": now + expires_delta,
        "jti": secrets.token_urlsafe(24),
    }
    return jwt.encode(payload, _secret_for(token_type), algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    return _encode(subject, ACCESS, expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(subject: str) -> str:
    settings = get_settings()
    return _encode(subject, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str, token_type: str = ACCESS) -> dict:
    """Decode and verify a token; raises ``JWTError`` on any failure, including a type mismatch."""
    settings = get_settings()
    claims = jwt.decode(
        token,
        _secret_for(token_type),
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
    if claims.get("typ") != token_type:
        raise JWTError("Invalid token type")
    return claims


def issue_tokens(response: Response, user_id: int) -> str:
    """Set the refresh cookie on ``response`` and return a fresh access token."""
    settings = get_settings()
    response.set_cookie(
        settings.REFRESH_COOKIE_NAME,
        create_refresh_token(str(user_id)),
        httponly=True,
        secure=not settings.is_development,
        samesite="strict",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )
    return create_access_token(str(user_id))


def clear_refresh_cookie(response: Response) -> None:
    settings = get_settings()
    response.set_cookie(
        settings.REFRESH_COOKIE_NAME,
        "",
        httponly=True,
        expires=datetime(1970, 1, 1, tzinfo=timezone.utc),
    )
