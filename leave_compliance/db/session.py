"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from leave_compliance.core.config import settings
from leave_compliance.db.base import Base

_connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=_connect_args,
)

# Create all tables automatically on startup for SQLite
if "sqlite" in settings.DATABASE_URL:
    import leave_compliance.models  # noqa: F401  (register tables on Base.metadata)
    Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
