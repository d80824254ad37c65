import html
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from luxe_estate.core.database import get_db
from luxe_estate.core.deps import authorize_owner, get_current_user, require_roles
from luxe_estate.models.inquiry import Inquiry, InquiryStatus
from luxe_estate.models.notification import NotificationType
from luxe_estate.models.property import Property
from luxe_estate.models.user import User, UserRole
from luxe_estate.schemas.inquiry import InquiryCreate, InquiryReply, InquiryResponse, InquiryStatusUpdate, ReplyResponse
from luxe_estate.services.email import send_email
from luxe_estate.services.notifications import notify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inquiries", tags=["inquiries"])


def _get_inquiry_or_404(db: Session, inquiry_id: int) -> Inquiry:
    inquiry = db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    return inquiry


def _reply_bodies(name: str, property_title: str, message: str) -> tuple[str, str]:
    text = (
        f"Hello {name},\n\n"
        f"You have received a reply regarding your inquiry for property: {property_title}.\n\n"
        "Message from Agent:\n"
        "----------------------------------------\n"
        f"{message}\n"
        "----------------------------------------\n\n"
        "Best regards,\nLuxeEstate Team\n"
    )
    body_html = (
        f"<h3>Hello {html.escape(name)},</h3>"
        "<p>You have received a reply regarding your inquiry for property: "
        f"<strong>{html.escape(property_title)}</strong>.</p>"
        "<p><strong>Message from Agent:</strong></p>"
        '<div style="background-color: #f3f4f6; padding: 15px; border-radius: 5px; margin: 20px 0;">'
        f"{html.escape(message).replace(chr(10), '<br>')}"
        "</div>"
        "<p>Best regards,<br>LuxeEstate Team</p>"
    )
    return text, body_html


@router.post("", response_model=InquiryResponse, status_code=201)
def create_inquiry(payload: InquiryCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    prop = db.query(Property).filter(Property.id == payload.property_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")

    inquiry = Inquiry(property_id=prop.id, user_id=current_user.id, message=payload.message)
    db.add(inquiry)
    prop.inquiry_count += 1
    db.commit()
    db.refresh(inquiry)

    preview = payload.message[:50]
    notify(
        db,
        prop.agent_id,
        "New Property Inquiry",
        f'New inquiry for "{prop.title}": {preview}...',
        link="/seller/dashboard?tab=inquiries",
    )
    return inquiry


@router.get("/agent", response_model=list[InquiryResponse])
def agent_inquiries(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.agent, UserRole.admin)),
):
    return (
        db.query(Inquiry)
        .join(Property, Inquiry.property_id == Property.id)
        .filter(Property.agent_id == current_user.id)
        .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        .all()
    )


@router.get("/my", response_model=list[InquiryResponse])
def my_inquiries(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return (
        db.query(Inquiry)
        .filter(Inquiry.user_id == current_user.id)
        .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        .all()
    )


@router.put("/{inquiry_id}", response_model=InquiryResponse)
def update_inquiry_status(
    inquiry_id: int,
    payload: InquiryStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    inquiry = _get_inquiry_or_404(db, inquiry_id)
    authorize_owner(current_user, inquiry.property.agent_id, "update this inquiry")

    if payload.status is not None:
        inquiry.status = payload.status
    db.commit()
    db.refresh(inquiry)

    if payload.status is not None and inquiry.user_id:
        notify(
            db,
            inquiry.user_id,
            "Inquiry Update",
            f"Your inquiry for {inquiry.property.title} has been updated to {inquiry.status.value}.",
            link="/dashboard?tab=inquiries",
        )
    return inquiry


@router.post("/{inquiry_id}/reply", response_model=ReplyResponse)
def reply_to_inquiry(
    inquiry_id: int,
    payload: InquiryReply,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    inquiry = _get_inquiry_or_404(db, inquiry_id)
    prop = inquiry.property
    authorize_owner(current_user, prop.agent_id, "reply to this inquiry")

    author = inquiry.user
    if not author or not author.email:
        raise HTTPException(status_code=400, detail="Inquirer email not found")

    text, body_html = _reply_bodies(author.name, prop.title, payload.message)
    try:
        send_email(author.email, payload.subject or f"Re: Inquiry for {prop.title}", text, html=body_html)
    except Exception:
        # The reply only counts once the email is out.
        logger.exception("Reply email for inquiry %s failed", inquiry.id)
        raise HTTPException(status_code=500, detail="Email could not be sent")

    if inquiry.status == InquiryStatus.pending:
        inquiry.status = InquiryStatus.reviewed
        db.commit()

    notify(
        db,
        author.id,
        "New Reply Received",
        f"New reply received for your inquiry on {prop.title}",
        type=NotificationType.success,
        link="/dashboard?tab=inquiries",
    )
    return ReplyResponse(success=True, message="Email sent successfully")
