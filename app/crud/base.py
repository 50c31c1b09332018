import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exception import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, operation: str):
    """Commit on success; roll back and raise StorageError on database failure."""
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during {operation}: {e}")
        raise StorageError(details={"operation": operation}) from e
    except Exception:
        db.rollback()
        raise


def commit(db: Session, operation: str) -> None:
    """Commit pending changes made to already-loaded objects."""
    with transaction(db, operation):
        pass
