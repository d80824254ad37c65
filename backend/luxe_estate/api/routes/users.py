import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from luxe_estate.core.database import get_db
from luxe_estate.core.deps import get_current_user, require_roles
from luxe_estate.core.security import WEAK_PASSWORD_DETAIL, get_password_hash, issue_tokens, validate_password_strength
from luxe_estate.models.notification import NotificationType
from luxe_estate.models.property import Property
from luxe_estate.models.user import SellerApplicationStatus, User, UserRole, WishlistItem
from luxe_estate.schemas.auth import AuthResponse, auth_response
from luxe_estate.schemas.property import PropertyResponse
from luxe_estate.schemas.user import (
    AdminUserResponse,
    RoleUpdate,
    SellerRejection,
    UserProfileUpdate,
    UserResponse,
    WishlistResponse,
)
from luxe_estate.services.directory import AdminDirectory, get_admin_directory
from luxe_estate.services.notifications import notify, notify_admins

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

DEFAULT_REJECTION_REASON = "No specific reason provided."


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/wishlist", response_model=list[PropertyResponse])
def get_wishlist(current_user: User = Depends(get_current_user)):
    # Newest additions first.
    return [item.property for item in reversed(current_user.wishlist_items)]


@router.put("/wishlist/{property_id}", response_model=WishlistResponse)
def toggle_wishlist(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")

    existing = next((item for item in current_user.wishlist_items if item.property_id == prop.id), None)
    if existing:
        current_user.wishlist_items.remove(existing)
        prop.wishlist_count = max(0, prop.wishlist_count - 1)
    else:
        current_user.wishlist_items.append(WishlistItem(property_id=prop.id))
        prop.wishlist_count += 1

    # Both sides commit together before responding; there is no guard against concurrent toggles.
    db.commit()
    db.refresh(current_user)
    return WishlistResponse(wishlist=current_user.wishlist)


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(payload: UserProfileUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    if payload.name:
        current_user.name = payload.name
    if payload.password:
        if not validate_password_strength(payload.password):
            raise HTTPException(status_code=400, detail=WEAK_PASSWORD_DETAIL)
        current_user.hashed_password = get_password_hash(payload.password)
        current_user.auth_local = True
    if payload.receive_push_notifications is not None:
        current_user.receive_push_notifications = payload.receive_push_notifications
    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/apply-seller", response_model=AuthResponse)
def apply_for_seller(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    directory: AdminDirectory = Depends(get_admin_directory),
):
    if current_user.role in (UserRole.agent, UserRole.admin):
        raise HTTPException(status_code=400, detail="You are already an agent or admin")

    current_user.seller_application_status = SellerApplicationStatus.pending
    db.commit()
    db.refresh(current_user)
    logger.info("User %s applied for a seller account", current_user.id)

    notify_admins(
        db,
        directory,
        "New Seller Application",
        f"{current_user.name} has applied for a seller account.",
        link="/admin/dashboard",
    )
    return auth_response(current_user, issue_tokens(response, current_user.id))


@router.get("", response_model=list[AdminUserResponse])
def list_users(db: Session = Depends(get_db), _: User = Depends(require_roles(UserRole.admin))):
    return (
        db.query(User)
        .filter(User.is_deleted == False)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), current: User = Depends(require_roles(UserRole.admin))):
    user = _get_user_or_404(db, user_id)
    if user.id == current.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own admin account")
    user.is_deleted = True
    db.commit()
    logger.info("Admin %s soft-deleted user %s", current.id, user_id)
    return {"message": "User removed"}


@router.put("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(require_roles(UserRole.admin)),
):
    user = _get_user_or_404(db, user_id)
    if payload.role is not None:
        if payload.role == UserRole.agent and user.role != UserRole.agent:
            # Promotion settles any open seller application.
            user.seller_application_status = SellerApplicationStatus.none
        user.role = payload.role
    db.commit()
    db.refresh(user)
    logger.info("Admin %s set role of user %s to %s", current.id, user.id, user.role.value)
    return user


@router.put("/{user_id}/reject-seller")
def reject_seller_application(
    user_id: int,
    payload: SellerRejection | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.admin)),
):
    user = _get_user_or_404(db, user_id)
    if user.seller_application_status != SellerApplicationStatus.pending:
        raise HTTPException(status_code=400, detail="User has no pending seller application")

    reason = payload.reason if payload else None
    user.seller_application_status = SellerApplicationStatus.rejected
    user.rejection_reason = reason or DEFAULT_REJECTION_REASON
    db.commit()

    notify(
        db,
        user.id,
        "Application Rejected",
        f"Your seller application was rejected. Reason: {user.rejection_reason}",
        type=NotificationType.error,
        link="/dashboard",
    )
    return {"message": "Application rejected"}
