from datetime import datetime
import enum

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from luxe_estate.core.database import Base


class ApprovalStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(160), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    address: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(120), index=True)
    state: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str | None] = mapped_column(String(120))

    bedrooms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    area_sqft: Mapped[float | None] = mapped_column(Float)
    property_type: Mapped[str] = mapped_column(String(50), nullable=False)
    amenities: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    images: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(500))

    agent_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    approval_status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus), default=ApprovalStatus.pending, index=True, nullable=False
    )
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    inquiry_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    wishlist_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    agent = relationship("User", lazy="joined")
    inquiries = relationship("Inquiry", back_populates="property", cascade="all, delete-orphan")
    wishlist_entries = relationship("WishlistItem", back_populates="property", cascade="all, delete-orphan")

    @property
    def location(self) -> dict:
        return {"address": self.address, "city": self.city, "state": self.state, "country": self.country}

    @location.setter
    def location(self, value: dict | None) -> None:
        value = value or {}
        self.address = value.get("address")
        self.city = value.get("city")
        self.state = value.get("state")
        self.country = value.get("country")

    @property
    def stats(self) -> dict:
        return {"views": self.views, "inquiries": self.inquiry_count, "wishlist_count": self.wishlist_count}

    @property
    def is_public(self) -> bool:
        return self.approval_status == ApprovalStatus.approved and not self.is_archived
