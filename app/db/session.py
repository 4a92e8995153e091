## Engine + session factory
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.settings import settings


def make_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        # FastAPI runs sync dependencies in a threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables. Importing the models registers them on Base.metadata."""
    from app.db.models import feedback, milestone, resource, roadmap  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
