from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from luxe_estate.core.config import get_settings


class Base(DeclarativeBase):
    pass


def _engine_kwargs(uri: str) -> dict:
    if not uri.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    # In-memory databases live inside a single connection.
    if uri in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


_uri = get_settings().SQLALCHEMY_DATABASE_URI
engine = create_engine(_uri, **_engine_kwargs(_uri))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
