from dataclasses import dataclass
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


@dataclass
class StudyError(Exception):
    status_code: int
    message: str
    details: Optional[Dict[str, object]] = None


def commit_or_error(db: Session, action: str) -> None:
    """Commit the pending unit of work, turning storage failures into a 500."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StudyError(500, f"Failed to {action}: {exc}") from exc
