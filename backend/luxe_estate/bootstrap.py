import logging

from sqlalchemy.orm import Session

from luxe_estate.core.config import get_settings
from luxe_estate.core.database import SessionLocal
from luxe_estate.core.security import get_password_hash
from luxe_estate.models.user import User, UserRole

logger = logging.getLogger(__name__)


def bootstrap_admin(db: Session) -> User | None:
    """Create the initial admin from INITIAL_ADMIN_EMAIL / INITIAL_ADMIN_PASSWORD when no admin exists."""
    settings = get_settings()
    email = settings.INITIAL_ADMIN_EMAIL.strip().lower()
    password = settings.INITIAL_ADMIN_PASSWORD
    if not email or not password:
        logger.debug("Admin bootstrap skipped; INITIAL_ADMIN_EMAIL or INITIAL_ADMIN_PASSWORD unset")
        return None

    admin = db.query(User).filter(User.role == UserRole.admin, User.is_deleted == False).order_by(User.id).first()
    if admin:
        return admin
    if db.query(User.id).filter(User.email == email).first() is not None:
        logger.warning("Admin bootstrap skipped; %s is already registered as a non-admin", email)
        return None

    admin = User(
        name="Administrator",
        email=email,
        hashed_password=get_password_hash(password),
        role=UserRole.admin,
        auth_local=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created initial admin %s", email)
    return admin


if __name__ == "__main__":
    from luxe_estate.core.logging import configure_logging

    configure_logging(get_settings().LOG_LEVEL)
    db = SessionLocal()
    try:
        if bootstrap_admin(db) is None:
            logger.warning("Bootstrap skipped. Set INITIAL_ADMIN_EMAIL and INITIAL_ADMIN_PASSWORD to create an admin user.")
    finally:
        db.close()
