from typing import Callable, Optional, TypeVar

import structlog
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.config import settings
from app.core.exceptions import ConcurrentUpdateError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def run_in_transaction(
    db: Session,
    work: Callable[[], T],
    operation: str,
    retries: Optional[int] = None,
) -> T:
    """
    Run `work` as one unit of work and commit it.

    Any error rolls the whole unit back, so no partial writes survive. A
    version conflict on a row (another transaction committed first) re-runs
    `work` from scratch against fresh state, up to `retries` more times.
    """
    max_retries = settings.STOCK_CONFLICT_RETRIES if retries is None else retries
    attempts = max(max_retries, 0) + 1

    for attempt in range(1, attempts + 1):
        try:
            result = work()
            db.commit()
            return result
        except StaleDataError:
            db.rollback()
            if attempt >= attempts:
                logger.error("transaction_conflict_exhausted", operation=operation, attempts=attempt)
                raise ConcurrentUpdateError(operation, attempt)
            logger.warning("transaction_conflict_retry", operation=operation, attempt=attempt)
        except Exception:
            db.rollback()
            raise
