from contextlib import contextmanager
import logging

from extensions import db


logger = logging.getLogger("db_context")


@contextmanager
def transaction():
    """Provide a transactional scope around a series of DB operations.

    Commits when the block exits cleanly; on any exception every write made
    in the block is rolled back and the exception propagates.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception:
        logger.warning("[transaction] rolling back")
        session.rollback()
        raise
