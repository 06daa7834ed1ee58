"""
RK Media Server v1.0.0 - Database Configuration
SQLAlchemy engine and session management
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from .config import settings


def build_engine(url: str, echo: bool = False):
    """
    Create an engine for the given URL

    SQLite connections are shared across the request threadpool, and an
    in-memory database must live on a single connection to survive.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo,
    )


# Database URL from config
DATABASE_URL = settings.DATABASE_URL

# Create engine
engine = build_engine(DATABASE_URL, echo=settings.DEBUG)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI to get database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize database (create tables)
    """
    from . import models  # noqa
    Base.metadata.create_all(bind=bind or engine)
