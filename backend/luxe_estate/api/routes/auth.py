import logging

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response
from jose import JWTError
from sqlalchemy.orm import Session

from luxe_estate.core.config import get_settings
from luxe_estate.core.database import get_db
from luxe_estate.core.deps import SUSPENDED_DETAIL, get_current_user
from luxe_estate.core.rate_limit import limiter
from luxe_estate.core.security import (
    REFRESH,
    WEAK_PASSWORD_DETAIL,
    clear_refresh_cookie,
    decode_token,
    get_password_hash,
    issue_tokens,
    validate_password_strength,
)
from luxe_estate.models.user import SellerApplicationStatus, User, UserRole
from luxe_estate.schemas.auth import (
    AuthResponse,
    GoogleLoginRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    auth_response,
)
from luxe_estate.schemas.user import UserResponse
from luxe_estate.services import google_auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.lower()).first()


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit("10/minute")
def register(request: Request, response: Response, payload: RegisterRequest, db: Session = Depends(get_db)):
    if _find_by_email(db, payload.email):
        raise HTTPException(status_code=400, detail="User already exists")
    if not validate_password_strength(payload.password):
        raise HTTPException(status_code=400, detail=WEAK_PASSWORD_DETAIL)

    # Public signup never grants a privileged role; asking for "agent" files a seller application.
    seller_status = SellerApplicationStatus.pending if payload.role == UserRole.agent else SellerApplicationStatus.none
    user = User(
        name=payload.name,
        email=payload.email,
        hashed_password=get_password_hash(payload.password),
        role=UserRole.user,
        seller_application_status=seller_status,
        auth_local=True,
        auth_google=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (seller application: %s)", user.id, seller_status.value)
    return auth_response(user, issue_tokens(response, user.id))


@router.post("/login", response_model=AuthResponse)
@limiter.limit("20/minute")
def login(request: Request, response: Response, payload: LoginRequest, db: Session = Depends(get_db)):
    user = _find_by_email(db, payload.email)
    if user and user.is_deleted:
        raise HTTPException(status_code=403, detail=SUSPENDED_DETAIL)
    if not user or not user.match_password(payload.password):
        logger.info("Failed login for %s", payload.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user.auth_local:
        user.auth_local = True
        db.commit()
        db.refresh(user)
    return auth_response(user, issue_tokens(response, user.id))


@router.post("/google", response_model=AuthResponse)
@limiter.limit("20/minute")
def google_login(request: Request, response: Response, payload: GoogleLoginRequest, db: Session = Depends(get_db)):
    try:
        info = google_auth.verify_google_credential(payload.credential)
    except google_auth.GoogleTokenError as exc:
        raise HTTPException(status_code=401, detail=f"Invalid Google Token: {exc}")

    email = str(info["email"]).strip().lower()
    google_id = str(info.get("sub") or "")
    picture = info.get("picture")

    user = _find_by_email(db, email)
    if user and user.is_deleted:
        raise HTTPException(status_code=403, detail=SUSPENDED_DETAIL)

    if user:
        # Link the Google identity to the existing account and refresh the avatar.
        if not user.google_id:
            user.google_id = google_id
            user.auth_google = True
        if picture and user.avatar != picture:
            user.avatar = picture
        db.commit()
        db.refresh(user)
    else:
        user = User(
            name=str(info.get("name") or info.get("given_name") or email.split("@", 1)[0]),
            email=email,
            google_id=google_id,
            auth_local=False,
            auth_google=True,
        )
        if picture:
            user.avatar = picture
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created Google account user %s", user.id)

    return auth_response(user, issue_tokens(response, user.id))


@router.post("/logout")
def logout(response: Response):
    clear_refresh_cookie(response)
    return {"message": "Logged out successfully"}


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(
    response: Response,
    refresh_cookie: str | None = Cookie(default=None, alias=get_settings().REFRESH_COOKIE_NAME),
    db: Session = Depends(get_db),
):
    if not refresh_cookie:
        raise HTTPException(status_code=401, detail="Not authorized, no refresh token")
    try:
        claims = decode_token(refresh_cookie, REFRESH)
        user_id = int(claims.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    if user.is_deleted:
        raise HTTPException(status_code=403, detail=SUSPENDED_DETAIL)
    return TokenResponse(token=issue_tokens(response, user.id))


@router.put("/profile", response_model=AuthResponse)
def update_profile(
    payload: ProfileUpdate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if payload.name:
        current_user.name = payload.name

    # Admin email is fixed once the account holds the admin role.
    if payload.email and current_user.role != UserRole.admin:
        new_email = payload.email.lower()
        if new_email != current_user.email:
            if _find_by_email(db, new_email):
                raise HTTPException(status_code=400, detail="Email already in use")
            current_user.email = new_email

    if payload.receive_push_notifications is not None:
        current_user.receive_push_notifications = payload.receive_push_notifications

    if payload.password:
        if not payload.old_password:
            raise HTTPException(status_code=400, detail="Please provide your current password to set a new one.")
        if not current_user.match_password(payload.old_password):
            raise HTTPException(status_code=401, detail="Invalid current password")
        if not validate_password_strength(payload.password):
            raise HTTPException(status_code=400, detail=WEAK_PASSWORD_DETAIL)
        current_user.hashed_password = get_password_hash(payload.password)

    db.commit()
    db.refresh(current_user)
    return auth_response(current_user, issue_tokens(response, current_user.id))


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
