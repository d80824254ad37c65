from datetime import datetime

from pydantic import Field

from luxe_estate.models.property import ApprovalStatus
from luxe_estate.schemas.base import ApiModel
from luxe_estate.schemas.user import UserSummary


class Location(ApiModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


class PropertyStats(ApiModel):
    views: int = 0
    inquiries: int = 0
    wishlist_count: int = 0


class PropertyCreate(ApiModel):
    title: str = Field(min_length=1)
    description: str
    price: float = Field(ge=0)
    location: Location = Field(default_factory=Location)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    area_sqft: float | None = Field(default=None, ge=0)
    property_type: str
    amenities: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    cover_image: str | None = None


class PropertyUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    location: Location | None = None
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    area_sqft: float | None = Field(default=None, ge=0)
    property_type: str | None = None
    amenities: list[str] | None = None
    images: list[str] | None = None
    cover_image: str | None = None
    approval_status: ApprovalStatus | None = None
    is_archived: bool | None = None


class PropertyResponse(ApiModel):
    id: int
    title: str
    slug: str
    description: str
    price: float
    location: Location
    bedrooms: int
    bathrooms: int
    area_sqft: float | None
    property_type: str
    amenities: list[str]
    images: list[str]
    cover_image: str | None
    agent_id: int
    agent: UserSummary | None = None
    approval_status: ApprovalStatus
    is_archived: bool
    stats: PropertyStats
    created_at: datetime
    updated_at: datetime


class PropertyBrief(ApiModel):
    id: int
    title: str
    slug: str
    cover_image: str | None = None
    agent_id: int


class PropertyPage(ApiModel):
    properties: list[PropertyResponse]
    page: int
    pages: int
    total: int


class UploadResponse(ApiModel):
    urls: list[str]
