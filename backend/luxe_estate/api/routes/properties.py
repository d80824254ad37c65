import logging
import math

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy import or_
from sqlalchemy.orm import Session

from luxe_estate.core.database import get_db
from luxe_estate.core.deps import authorize_owner, get_current_user, require_roles
from luxe_estate.models.property import ApprovalStatus, Property
from luxe_estate.models.user import User, UserRole
from luxe_estate.schemas.property import (
    PropertyCreate,
    PropertyPage,
    PropertyResponse,
    PropertyStats,
    PropertyUpdate,
    UploadResponse,
)
from luxe_estate.services.directory import AdminDirectory, get_admin_directory
from luxe_estate.services.listings import (
    announce_submission,
    check_status_change,
    notify_review_outcome,
    submit_for_review,
    unique_slug,
)
from luxe_estate.services.media import MediaUploadError, upload_images

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["properties"])


def _prefix_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}%"


def _get_property_or_404(db: Session, property_id: int) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


@router.get("", response_model=PropertyPage)
def list_properties(
    search: str | None = None,
    city: str | None = None,
    type: str | None = None,
    property_type: str | None = Query(default=None, alias="propertyType"),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    bedrooms: int | None = None,
    bathrooms: int | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(Property).filter(
        Property.approval_status == ApprovalStatus.approved,
        Property.is_archived == False,
    )

    if search:
        pattern = _prefix_pattern(search)
        query = query.filter(
            or_(
                Property.title.ilike(pattern, escape="\\"),
                Property.city.ilike(pattern, escape="\\"),
                Property.state.ilike(pattern, escape="\\"),
                Property.country.ilike(pattern, escape="\\"),
            )
        )
    if city:
        query = query.filter(Property.city.ilike(_prefix_pattern(city), escape="\\"))

    type_filter = type or property_type
    if type_filter:
        query = query.filter(Property.property_type == type_filter)
    if min_price is not None:
        query = query.filter(Property.price >= min_price)
    if max_price is not None:
        query = query.filter(Property.price <= max_price)
    if bedrooms is not None:
        query = query.filter(Property.bedrooms >= bedrooms)
    if bathrooms is not None:
        query = query.filter(Property.bathrooms >= bathrooms)

    total = query.count()
    rows = (
        query.order_by(Property.created_at.desc(), Property.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return PropertyPage(
        properties=[PropertyResponse.model_validate(row) for row in rows],
        page=page,
        pages=math.ceil(total / limit),
        total=total,
    )


@router.get("/agent/my-listings", response_model=list[PropertyResponse])
def my_listings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.agent, UserRole.admin)),
):
    return (
        db.query(Property)
        .filter(Property.agent_id == current_user.id)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .all()
    )


@router.get("/admin/all", response_model=list[PropertyResponse])
def all_properties(db: Session = Depends(get_db), _: User = Depends(require_roles(UserRole.admin))):
    return db.query(Property).order_by(Property.created_at.desc(), Property.id.desc()).all()


@router.post("/upload", response_model=UploadResponse)
def upload_property_images(
    images: list[UploadFile] | None = File(default=None),
    _: User = Depends(require_roles(UserRole.agent, UserRole.admin)),
):
    if not images:
        raise HTTPException(status_code=400, detail="No images uploaded")
    try:
        urls = upload_images([image.file for image in images])
    except MediaUploadError as exc:
        logger.error("Image upload error: %s", exc)
        raise HTTPException(status_code=500, detail=f"Image upload failed: {exc}")
    return UploadResponse(urls=urls)


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(
    payload: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.agent, UserRole.admin)),
    directory: AdminDirectory = Depends(get_admin_directory),
):
    prop = Property(
        **payload.model_dump(exclude={"location"}),
        location=payload.location.model_dump(),
        slug=unique_slug(db, payload.title),
        agent_id=current_user.id,
        # New listings always wait for review, whatever the client sent.
        approval_status=ApprovalStatus.pending,
    )
    db.add(prop)
    db.commit()
    db.refresh(prop)
    logger.info("Property %s created by user %s", prop.id, current_user.id)

    announce_submission(db, directory, prop, current_user, link="/admin/dashboard?tab=listings")
    return prop


@router.get("/{id_or_slug}", response_model=PropertyResponse)
def get_property(id_or_slug: str, db: Session = Depends(get_db)):
    prop = db.query(Property).filter(Property.slug == id_or_slug).first()
    if not prop and id_or_slug.isdigit():
        prop = db.query(Property).filter(Property.id == int(id_or_slug)).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")

    # Every read of a single listing counts as a view.
    prop.views += 1
    db.commit()
    db.refresh(prop)
    return prop


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    payload: PropertyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prop = _get_property_or_404(db, property_id)
    authorize_owner(current_user, prop.agent_id, "update this property")
    check_status_change(current_user, payload.approval_status)

    previous_status = prop.approval_status
    for field, value in payload.model_dump(exclude_none=True, exclude={"location"}).items():
        setattr(prop, field, value)
    if payload.location is not None:
        prop.location = payload.location.model_dump()

    db.commit()
    db.refresh(prop)
    notify_review_outcome(db, prop, current_user, previous_status)
    return prop


@router.delete("/{property_id}")
def delete_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    prop = _get_property_or_404(db, property_id)
    authorize_owner(current_user, prop.agent_id, "delete this property")
    db.delete(prop)
    db.commit()
    logger.info("Property %s deleted by user %s", property_id, current_user.id)
    return {"message": "Property removed"}


@router.post("/{property_id}/publish", response_model=PropertyResponse)
def publish_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    directory: AdminDirectory = Depends(get_admin_directory),
):
    prop = _get_property_or_404(db, property_id)
    authorize_owner(current_user, prop.agent_id, "publish this property")
    return submit_for_review(db, directory, prop, current_user)


@router.get("/{property_id}/stats", response_model=PropertyStats)
def property_stats(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    prop = _get_property_or_404(db, property_id)
    authorize_owner(current_user, prop.agent_id, "view stats")
    return prop.stats
