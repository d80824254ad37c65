from datetime import datetime

from luxe_estate.models.user import SellerApplicationStatus, UserRole
from luxe_estate.schemas.base import ApiModel


class AuthProviders(ApiModel):
    local: bool = False
    google: bool = False


class UserSummary(ApiModel):
    id: int
    name: str
    email: str
    avatar: str | None = None


class UserResponse(ApiModel):
    id: int
    name: str
    email: str
    avatar: str | None
    role: UserRole
    seller_application_status: SellerApplicationStatus
    rejection_reason: str
    receive_push_notifications: bool
    auth_providers: AuthProviders


class AdminUserResponse(UserResponse):
    is_deleted: bool
    created_at: datetime


class UserProfileUpdate(ApiModel):
    name: str | None = None
    password: str | None = None
    receive_push_notifications: bool | None = None


class RoleUpdate(ApiModel):
    role: UserRole | None = None


class SellerRejection(ApiModel):
    reason: str | None = None


class WishlistResponse(ApiModel):
    wishlist: list[int]
