"""Database engine and session factory for durable storage"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hire_purchase_portal.infrastructure.database.models import Base


def create_session_factory(database_url: str) -> sessionmaker:
    """Build a session factory and make sure the storage table exists"""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        connect_args=connect_args,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
