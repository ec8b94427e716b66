import logging
from contextlib import contextmanager
from typing import Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ojt_records.errors import PersistenceFailure, ServiceError

logger = logging.getLogger(__name__)


class SqlStore:
    """Common plumbing for stores: one committed unit of work per call."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def guarded(self, action: str, on_conflict: Optional[Type[ServiceError]] = None):
        """
        Roll back and re-raise storage errors as domain failures.

        Args:
            action: what the store was doing, for the log line
            on_conflict: failure to raise when a constraint is violated
        """
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            if on_conflict is not None:
                logger.warning(f"Constraint violated during {action}")
                raise on_conflict() from e
            logger.error(f"Integrity error during {action}: {str(e)}", exc_info=True)
            raise PersistenceFailure() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error during {action}: {str(e)}", exc_info=True)
            raise PersistenceFailure() from e
