from typing import Generator

import structlog
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

logger = structlog.get_logger(__name__)


def create_database_engine(database_url: str = None):
    url = database_url or settings.DATABASE_URL
    connect_args = {}
    if url.startswith("sqlite"):
        # SQLite connections are handed between FastAPI's worker threads
        connect_args["check_same_thread"] = False

    engine = create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    logger.info("database_engine_created", backend=engine.dialect.name)
    return engine


engine = create_database_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; services own commit, this only cleans up."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
