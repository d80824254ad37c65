from datetime import datetime

from luxe_estate.models.notification import NotificationType
from luxe_estate.schemas.base import ApiModel


class NotificationResponse(ApiModel):
    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    link: str | None
    is_read: bool
    created_at: datetime
