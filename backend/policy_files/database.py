# backend/policy_files/database.py
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings
from .utils.logging import db_logger

Base = declarative_base()


def create_db_engine(database_url: Optional[str]) -> Optional[Engine]:
    """Build the engine, or None when no database is configured"""
    if not database_url:
        db_logger.warning("DATABASE_URL not set; document store disabled")
        return None

    db_logger.info("Connecting to database", extra={"dialect": database_url.split(":", 1)[0]})
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
        pool_pre_ping=True,
        echo=False
    )


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine is not None else None


def init_models() -> None:
    """Create tables from ORM metadata when a database is configured"""
    if engine is None:
        return
    Base.metadata.create_all(bind=engine)
    db_logger.info("Database tables created/checked")


def get_db() -> Iterator[Optional[Session]]:
    if SessionLocal is None:
        yield None
        return

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
