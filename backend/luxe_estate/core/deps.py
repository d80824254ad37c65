from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from luxe_estate.core.config import get_settings
from luxe_estate.core.database import get_db
from luxe_estate.core.security import decode_token
from luxe_estate.models.user import User, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{get_settings().API_PREFIX}/auth/login")

SUSPENDED_DETAIL = "Your account has been suspended or deleted. Please contact support."


def user_from_token(db: Session, token: str) -> User | None:
    """Resolve an access token to a live user, or ``None`` if it is invalid or stale."""
    try:
        payload = decode_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        return None
    return db.get(User, user_id)


def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    user = user_from_token(db, token)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.is_deleted:
        raise HTTPException(status_code=403, detail=SUSPENDED_DETAIL)
    return user


def require_roles(*roles: UserRole):
    def role_dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=403,
                detail=f"User role {current_user.role.value} is not authorized to access this route",
            )
        return current_user

    return role_dependency


def authorize_owner(actor: User, owner_id: int | None, action: str) -> None:
    """Single ownership predicate: admins pass, everyone else must own the resource."""
    if actor.role == UserRole.admin:
        return
    if owner_id is not None and actor.id == owner_id:
        return
    raise HTTPException(status_code=403, detail=f"Not authorized to {action}")
