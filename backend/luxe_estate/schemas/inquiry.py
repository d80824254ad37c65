from datetime import datetime

from pydantic import Field

from luxe_estate.models.inquiry import InquiryStatus
from luxe_estate.schemas.base import ApiModel
from luxe_estate.schemas.property import PropertyBrief
from luxe_estate.schemas.user import UserSummary


class InquiryCreate(ApiModel):
    property_id: int
    message: str = Field(min_length=1)


class InquiryStatusUpdate(ApiModel):
    status: InquiryStatus | None = None


class InquiryReply(ApiModel):
    subject: str | None = None
    message: str = Field(min_length=1)


class InquiryResponse(ApiModel):
    id: int
    property_id: int
    user_id: int | None
    message: str
    status: InquiryStatus
    user: UserSummary | None = None
    property: PropertyBrief | None = None
    created_at: datetime
    updated_at: datetime


class ReplyResponse(ApiModel):
    success: bool
    message: str
