"""Commit helpers shared by the domain services"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def commit_or_fail(db: Session, action: str) -> None:
    """
    Commit the pending unit of work or roll all of it back.

    IntegrityError propagates so callers can map constraint violations to
    their own business errors; any other store failure becomes a generic 500.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Failed to {action}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to {action}. Please try again.") from e
