"""Engine, per-request sessions and schema bootstrap for the users and loan bookings store"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loan_origination.config import settings
from loan_origination.infrastructure.database.models import Base

# Up to 20 pooled connections (10 + 10 overflow); each one is replaced after an hour
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=10,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create tables and unique indexes if they do not exist yet"""
    Base.metadata.create_all(bind=engine)


def get_db() -> Session:
    """Yield one session per request and close it afterwards"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
