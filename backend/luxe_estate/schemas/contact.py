from datetime import datetime

from pydantic import EmailStr, Field

from luxe_estate.models.contact import ContactStatus
from luxe_estate.schemas.base import ApiModel


class ContactSubmit(ApiModel):
    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ContactSummary(ApiModel):
    id: int
    name: str
    email: str
    subject: str
    created_at: datetime


class ContactSubmitResponse(ApiModel):
    message: str
    inquiry: ContactSummary


class ContactStatusUpdate(ApiModel):
    status: ContactStatus | None = None
    response: str | None = None


class ContactInquiryResponse(ApiModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    status: ContactStatus
    response: str | None
    created_at: datetime
    updated_at: datetime
