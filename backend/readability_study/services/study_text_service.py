import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from readability_study.db import models
from readability_study.schemas.admin import StudyTextCreateRequest, StudyTextUpdateRequest

from .errors import StudyError
from .passage_service import serialize_passage, sort_passages

DEFAULT_VERSION = "default"
DEFAULT_FONT_LEFT = "serif"
DEFAULT_FONT_RIGHT = "sans"
logger = logging.getLogger(__name__)


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_study_text(study_text: models.StudyText) -> Dict[str, Any]:
    return {
        "id": study_text.id,
        "version": study_text.version,
        "content": study_text.content,
        "font_left": study_text.font_left,
        "font_right": study_text.font_right,
        "active": bool(study_text.active),
        "created_at": _isoformat(study_text.created_at),
        "updated_at": _isoformat(study_text.updated_at),
    }


def get_active_study_text(db: Session) -> Optional[models.StudyText]:
    return (
        db.query(models.StudyText)
        .filter(models.StudyText.active.is_(True))
        .order_by(models.StudyText.id.asc())
        .first()
    )


def resolve_study_text(db: Session, version: Optional[str]) -> Dict[str, Any]:
    """Payload for the reader: the active text for ``version``, else any active text.

    Passages replace the legacy inline ``content`` whenever the text has any.
    """
    requested = version or DEFAULT_VERSION
    study_text = (
        db.query(models.StudyText)
        .filter(models.StudyText.version == requested, models.StudyText.active.is_(True))
        .first()
    )
    if not study_text:
        study_text = get_active_study_text(db)
    if not study_text:
        raise StudyError(404, "No study text found")

    response: Dict[str, Any] = {
        "id": study_text.id,
        "version": study_text.version,
        "font_left": study_text.font_left,
        "font_right": study_text.font_right,
    }
    passages = sort_passages(study_text.passages)
    if passages:
        response["passages"] = [serialize_passage(passage) for passage in passages]
    else:
        response["content"] = study_text.content
    return response


def _deactivate_others(db: Session, keep_id: Optional[int] = None) -> None:
    query = db.query(models.StudyText).filter(models.StudyText.active.is_(True))
    if keep_id is not None:
        query = query.filter(models.StudyText.id != keep_id)
    query.update({models.StudyText.active: False}, synchronize_session=False)


def list_study_texts(db: Session) -> List[models.StudyText]:
    return (
        db.query(models.StudyText)
        .order_by(models.StudyText.created_at.desc(), models.StudyText.id.desc())
        .all()
    )


def find_study_text_by_version(db: Session, version: str) -> Optional[models.StudyText]:
    return db.query(models.StudyText).filter(models.StudyText.version == version).first()


def create_study_text(db: Session, payload: StudyTextCreateRequest) -> Tuple[models.StudyText, bool]:
    """Return ``(study_text, created)``; an existing version is returned untouched."""
    version = payload.version or DEFAULT_VERSION
    existing = find_study_text_by_version(db, version)
    if existing:
        return existing, False

    study_text = models.StudyText(
        version=version,
        content=payload.content or "",
        font_left=payload.font_left or DEFAULT_FONT_LEFT,
        font_right=payload.font_right or DEFAULT_FONT_RIGHT,
        active=payload.active,
    )
    # deactivation and insert share one transaction
    if payload.active:
        _deactivate_others(db)
    db.add(study_text)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Study text version %s collided on insert: %s", version, exc)
        raise StudyError(409, f"Study text with version '{version}' already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StudyError(500, f"Failed to create study text: {exc}") from exc
    db.refresh(study_text)
    return study_text, True


def update_study_text(db: Session, payload: StudyTextUpdateRequest) -> models.StudyText:
    if not payload.id:
        raise StudyError(400, "ID is required")

    study_text = db.query(models.StudyText).filter(models.StudyText.id == payload.id).first()
    if not study_text:
        raise StudyError(404, "Study text not found")

    if payload.version:
        study_text.version = payload.version
    if payload.content:
        study_text.content = payload.content
    if payload.font_left:
        study_text.font_left = payload.font_left
    if payload.font_right:
        study_text.font_right = payload.font_right
    if payload.active is not None:
        if payload.active:
            _deactivate_others(db, keep_id=study_text.id)
        study_text.active = payload.active

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise StudyError(409, f"Study text with version '{payload.version}' already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StudyError(500, f"Failed to update study text: {exc}") from exc
    db.refresh(study_text)
    return study_text
