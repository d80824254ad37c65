from datetime import datetime
import enum

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from luxe_estate.core.database import Base
from luxe_estate.core.security import verify_password

DEFAULT_AVATAR = "https://ui-avatars.com/api/?name=User&background=0D8ABC&color=fff"


class UserRole(str, enum.Enum):
    user = "user"
    agent = "agent"
    admin = "admin"


class SellerApplicationStatus(str, enum.Enum):
    none = "none"
    pending = "pending"
    rejected = "rejected"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    # Only required while local auth is enabled; pure Google accounts have none.
    hashed_password: Mapped[str | None] = mapped_column(String(255))
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True)
    avatar: Mapped[str] = mapped_column(String(500), default=DEFAULT_AVATAR, nullable=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.user, nullable=False)

    auth_local: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    auth_google: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    receive_push_notifications: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    seller_application_status: Mapped[SellerApplicationStatus] = mapped_column(
        Enum(SellerApplicationStatus), default=SellerApplicationStatus.none, nullable=False
    )
    rejection_reason: Mapped[str] = mapped_column(Text, default="", nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    wishlist_items = relationship(
        "WishlistItem",
        back_populates="user",
        order_by="WishlistItem.id",
        cascade="all, delete-orphan",
    )

    @property
    def auth_providers(self) -> dict:
        return {"local": self.auth_local, "google": self.auth_google}

    @property
    def wishlist(self) -> list[int]:
        return [item.property_id for item in self.wishlist_items]

    def match_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.hashed_password)


class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("user_id", "property_id", name="uq_wishlist_user_property"),)

    # Autoincrement id preserves insertion order.
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="wishlist_items")
    property = relationship("Property", back_populates="wishlist_entries")
