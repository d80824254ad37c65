from typing import Protocol

from fastapi import Depends
from sqlalchemy.orm import Session

from luxe_estate.core.database import get_db
from luxe_estate.models.user import User, UserRole


class AdminDirectory(Protocol):
    def admin_ids(self) -> list[int]: ...


class SqlAdminDirectory:
    """Active (not soft-deleted) admin accounts, oldest first."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def admin_ids(self) -> list[int]:
        rows = (
            self.db.query(User.id)
            .filter(User.role == UserRole.admin, User.is_deleted == False)
            .order_by(User.id)
            .all()
        )
        return [row.id for row in rows]


def get_admin_directory(db: Session = Depends(get_db)) -> AdminDirectory:
    return SqlAdminDirectory(db)
