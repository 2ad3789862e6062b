"""SQLAlchemy models and setup for the geocode cache."""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from screener.config import settings

Base = declarative_base()


class DBGeocodeCache(Base):
    """Geocoded coordinates per normalised address query."""

    __tablename__ = "geocode_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    query = Column(String(1000), unique=True, nullable=False, index=True)
    latitude = Column(Float)  # NULL when the geocoder found no match
    longitude = Column(Float)
    fetched_at = Column(DateTime, default=datetime.utcnow)
    expires_at = Column(DateTime)

    __table_args__ = (Index("idx_geocode_expires", "expires_at"),)

    @property
    def has_match(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def init_db(db_url: Optional[str] = None) -> sessionmaker:
    """Initialize database and return session maker."""
    if db_url is None:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    url = db_url or settings.database_url
    engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def get_session() -> Session:
    """Get a new session on the default cache database."""
    SessionLocal = init_db()
    return SessionLocal()
