"""
Shared helpers for repositories: deadline enforcement and error mapping.
"""
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import RequestTimeoutException, StorageException
from .deadline import Deadline, check_deadline

# Set up logging
logger = logging.getLogger(__name__)

# SQLSTATE raised by PostgreSQL when statement_timeout cancels a query
QUERY_CANCELED = "57014"


def apply_deadline(db: Session, deadline: Optional[Deadline]) -> None:
    """
    Fail fast on an expired deadline and bound the next statements by it.

    On PostgreSQL the remaining budget becomes a transaction-local
    ``statement_timeout`` so the server aborts an in-flight query. Other
    backends only get the up-front check.
    """
    check_deadline(deadline)
    if deadline is None:
        return
    if db.get_bind().dialect.name == "postgresql":
        timeout_ms = max(1, int(deadline.remaining() * 1000))
        db.execute(
            text("SELECT set_config('statement_timeout', :timeout, true)"),
            {"timeout": f"{timeout_ms}ms"},
        )


def is_statement_timeout(exc: DBAPIError) -> bool:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code == QUERY_CANCELED


@contextmanager
def storage_errors(db: Session, action: str):
    """
    Roll back and translate SQLAlchemy failures raised inside the block.

    Cancelled statements become ``RequestTimeoutException``; everything else
    becomes ``StorageException``. Nothing is retried here.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        if isinstance(e, DBAPIError) and is_statement_timeout(e):
            logger.warning(f"Statement timed out while {action}")
            raise RequestTimeoutException() from e
        logger.error(f"Storage error while {action}: {str(e)}")
        raise StorageException() from e
