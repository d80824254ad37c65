"""Approval workflow for property listings.

A listing is created at ``pending``. Owners may push it back to ``pending``
(re-submission); only admins move it to ``approved`` or ``rejected``. Each of
those admin transitions notifies the owning agent once, and each submission
notifies every admin.
"""
import re
import secrets

from fastapi import HTTPException
from sqlalchemy.orm import Session

from luxe_estate.models.notification import NotificationType
from luxe_estate.models.property import ApprovalStatus, Property
from luxe_estate.models.user import User, UserRole
from luxe_estate.services.directory import AdminDirectory
from luxe_estate.services.notifications import notify, notify_admins

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    return _SLUG_STRIP.sub("-", text.lower()).strip("-") or "property"


def unique_slug(db: Session, title: str) -> str:
    base = slugify(title)[:180]
    slug = base
    while db.query(Property.id).filter(Property.slug == slug).first() is not None:
        slug = f"{base}-{secrets.token_hex(3)}"
    return slug


def check_status_change(actor: User, requested: ApprovalStatus | None) -> None:
    """Only admins may approve or reject; anyone allowed to edit may re-submit."""
    if requested is None or requested == ApprovalStatus.pending:
        return
    if actor.role != UserRole.admin:
        raise HTTPException(status_code=403, detail="Only admins can approve or reject listings")


def notify_review_outcome(db: Session, prop: Property, actor: User, previous: ApprovalStatus) -> None:
    if actor.role != UserRole.admin:
        return
    current = prop.approval_status
    if previous != ApprovalStatus.approved and current == ApprovalStatus.approved:
        notify(
            db,
            prop.agent_id,
            "Property Approved",
            f'Your property "{prop.title}" has been approved and is now live.',
            type=NotificationType.success,
            link=f"/properties/{prop.slug}",
        )
    elif previous != ApprovalStatus.rejected and current == ApprovalStatus.rejected:
        notify(
            db,
            prop.agent_id,
            "Property Rejected",
            f'Your property "{prop.title}" has been rejected. Please review the listing guidelines.',
            type=NotificationType.error,
            link="/seller/dashboard",
        )


def announce_submission(db: Session, directory: AdminDirectory, prop: Property, actor: User, link: str) -> None:
    notify_admins(
        db,
        directory,
        "New Property Submission",
        f'{actor.name} has submitted "{prop.title}" for approval.',
        link=link,
    )


def submit_for_review(db: Session, directory: AdminDirectory, prop: Property, actor: User) -> Property:
    prop.approval_status = ApprovalStatus.pending
    db.commit()
    db.refresh(prop)
    announce_submission(db, directory, prop, actor, link="/admin/properties")
    return prop
