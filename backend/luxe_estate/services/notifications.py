import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from luxe_estate.models.notification import Notification, NotificationType
from luxe_estate.schemas.notification import NotificationResponse
from luxe_estate.services.directory import AdminDirectory
from luxe_estate.services.realtime import NOTIFICATION_EVENT, manager

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    user_id: int,
    title: str,
    message: str,
    type: NotificationType = NotificationType.info,
    link: str | None = "",
) -> Notification | None:
    """Persist a notification for ``user_id`` and push it to their live room.

    The row is committed before this returns. Failures are logged and never
    propagate to the request that triggered them.
    """
    try:
        notification = Notification(user_id=user_id, title=title, message=message, type=type, link=link)
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to persist notification for user %s", user_id)
        return None

    try:
        payload = NotificationResponse.model_validate(notification).model_dump(mode="json", by_alias=True)
        manager.emit_nowait(str(user_id), NOTIFICATION_EVENT, payload)
    except Exception:
        logger.exception("Failed to schedule live notification for user %s", user_id)
    return notification


def notify_admins(
    db: Session,
    directory: AdminDirectory,
    title: str,
    message: str,
    type: NotificationType = NotificationType.info,
    link: str | None = "",
) -> list[Notification]:
    sent = []
    for admin_id in directory.admin_ids():
        notification = notify(db, admin_id, title, message, type=type, link=link)
        if notification is not None:
            sent.append(notification)
    return sent
