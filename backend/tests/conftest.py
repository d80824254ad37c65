import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["INITIAL_ADMIN_EMAIL"] = ""
os.environ["INITIAL_ADMIN_PASSWORD"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["CLOUDINARY_CLOUD_NAME"] = ""

import pytest
from fastapi.testclient import TestClient

from luxe_estate.core.database import Base, SessionLocal, engine
from luxe_estate.core.security import create_access_token, get_password_hash
from luxe_estate.main import app
from luxe_estate.models.notification import Notification
from luxe_estate.models.property import ApprovalStatus, Property
from luxe_estate.models.user import User, UserRole
from luxe_estate.services.listings import unique_slug

DEFAULT_PASSWORD = "secret123"


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db):
    def factory(name: str, email: str, role: UserRole = UserRole.user, password: str | None = DEFAULT_PASSWORD, **fields) -> User:
        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(password) if password else None,
            role=role,
            auth_local=password is not None,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return factory


@pytest.fixture()
def make_property(db):
    def factory(agent: User, title: str = "Sea View Villa", status: ApprovalStatus = ApprovalStatus.approved, **fields) -> Property:
        values = {
            "description": "Three floors overlooking the bay.",
            "price": 450000,
            "property_type": "house",
            "city": "Lisbon",
            "country": "Portugal",
            "bedrooms": 3,
            "bathrooms": 2,
        }
        values.update(fields)
        prop = Property(title=title, slug=unique_slug(db, title), agent_id=agent.id, approval_status=status, **values)
        db.add(prop)
        db.commit()
        db.refresh(prop)
        return prop

    return factory


@pytest.fixture()
def admin(make_user):
    return make_user("Ada Admin", "admin@example.com", UserRole.admin)


@pytest.fixture()
def agent(make_user):
    return make_user("Alex Agent", "agent@example.com", UserRole.agent)


@pytest.fixture()
def other_agent(make_user):
    return make_user("Olive Agent", "olive@example.com", UserRole.agent)


@pytest.fixture()
def buyer(make_user):
    return make_user("Bea Buyer", "buyer@example.com")


@pytest.fixture()
def auth_headers():
    def build(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}

    return build


@pytest.fixture()
def notifications_for(db):
    def fetch(user: User, title: str | None = None) -> list[Notification]:
        db.expire_all()
        query = db.query(Notification).filter(Notification.user_id == user.id)
        if title is not None:
            query = query.filter(Notification.title == title)
        return query.order_by(Notification.id).all()

    return fetch
