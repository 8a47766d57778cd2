"""
Database engine, session factory and transactional boundary
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from table_manager.core.config import settings
from table_manager.core.errors import ConflictError, StorageError

logger = logging.getLogger(__name__)


def build_engine(url: str):
    """Create an engine; sqlite gets thread sharing, servers get a sized pool"""
    if url.startswith("sqlite"):
        return create_engine(url, echo=settings.DB_ECHO, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        pool_pre_ping=True,
        pool_recycle=1800,
    )


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables for all models"""
    from table_manager import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def storage_errors() -> Iterator[None]:
    """Classify driver errors raised inside the block.

    IntegrityError becomes ConflictError and everything else from SQLAlchemy
    becomes StorageError. Also usable as a decorator on service methods so
    plain reads are classified the same way as writes.
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning("Integrity error: %s", exc.orig)
        raise ConflictError(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        logger.warning("Storage error: %s", exc)
        raise StorageError(str(exc), original=exc) from exc


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a unit of work: commit on success, roll back on any failure.

    Driver errors are classified on the way out by ``storage_errors``.
    """
    with storage_errors():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
