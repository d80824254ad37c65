import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from luxe_estate.core.database import get_db
from luxe_estate.core.deps import require_roles
from luxe_estate.core.rate_limit import limiter
from luxe_estate.models.contact import ContactInquiry
from luxe_estate.models.user import User, UserRole
from luxe_estate.schemas.contact import (
    ContactInquiryResponse,
    ContactStatusUpdate,
    ContactSubmit,
    ContactSubmitResponse,
    ContactSummary,
)
from luxe_estate.workers.tasks import send_contact_notification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("/submit", response_model=ContactSubmitResponse, status_code=201)
@limiter.limit("5/minute")
def submit_contact(request: Request, payload: ContactSubmit, db: Session = Depends(get_db)):
    inquiry = ContactInquiry(**payload.model_dump())
    db.add(inquiry)
    db.commit()
    db.refresh(inquiry)

    # The submission stands even if the support inbox can't be reached.
    try:
        send_contact_notification.delay(payload.name, payload.email, payload.subject, payload.message)
    except Exception:
        logger.exception("Failed to queue contact notification for inquiry %s", inquiry.id)

    return ContactSubmitResponse(
        message="Thank you for your message. We will get back to you shortly.",
        inquiry=ContactSummary.model_validate(inquiry),
    )


@router.get("/inquiries", response_model=list[ContactInquiryResponse])
def list_contact_inquiries(db: Session = Depends(get_db), _: User = Depends(require_roles(UserRole.admin))):
    return db.query(ContactInquiry).order_by(ContactInquiry.created_at.desc(), ContactInquiry.id.desc()).all()


@router.put("/inquiries/{inquiry_id}/status", response_model=ContactInquiryResponse)
def update_contact_inquiry(
    inquiry_id: int,
    payload: ContactStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.admin)),
):
    inquiry = db.query(ContactInquiry).filter(ContactInquiry.id == inquiry_id).first()
    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")

    if payload.status is not None:
        inquiry.status = payload.status
    if payload.response is not None:
        inquiry.response = payload.response
    db.commit()
    db.refresh(inquiry)
    return inquiry
