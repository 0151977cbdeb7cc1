from typing import Any, Dict, Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from readability_study.db import models
from readability_study.schemas.admin import PassageCreateRequest, PassageUpdateRequest

from .errors import StudyError, commit_or_error


def serialize_passage(passage: models.Passage) -> Dict[str, Any]:
    return {
        "id": passage.id,
        "study_text_id": passage.study_text_id,
        "order": passage.order,
        "content": passage.content,
        "title": passage.title or "",
        "font_left": passage.font_left or "",
        "font_right": passage.font_right or "",
        "created_at": passage.created_at.isoformat() if passage.created_at else None,
        "updated_at": passage.updated_at.isoformat() if passage.updated_at else None,
    }


def sort_passages(passages: Iterable[models.Passage]) -> List[models.Passage]:
    # stable, so rows sharing an order keep their storage order
    return sorted(passages, key=lambda passage: passage.order or 0)


def next_passage_order(db: Session, study_text_id: int) -> int:
    max_order = (
        db.query(func.coalesce(func.max(models.Passage.order), -1))
        .filter(models.Passage.study_text_id == study_text_id)
        .scalar()
    )
    return int(max_order) + 1


def create_passage(db: Session, payload: PassageCreateRequest) -> models.Passage:
    if not payload.study_text_id or not payload.content:
        raise StudyError(400, "study_text_id and content are required")

    study_text = (
        db.query(models.StudyText).filter(models.StudyText.id == payload.study_text_id).first()
    )
    if not study_text:
        raise StudyError(404, "Study text not found")

    order = payload.order
    if not order:
        order = next_passage_order(db, study_text.id)

    passage = models.Passage(
        study_text_id=study_text.id,
        order=order,
        content=payload.content,
        title=payload.title or "",
        font_left=payload.font_left or "",
        font_right=payload.font_right or "",
    )
    db.add(passage)
    commit_or_error(db, "create passage")
    db.refresh(passage)
    return passage


def update_passage(db: Session, payload: PassageUpdateRequest) -> models.Passage:
    if not payload.id:
        raise StudyError(400, "ID is required")

    passage = get_passage(db, payload.id)
    if payload.content:
        passage.content = payload.content
    if payload.title:
        passage.title = payload.title
    if payload.order is not None:
        passage.order = payload.order
    if payload.font_left:
        passage.font_left = payload.font_left
    if payload.font_right:
        passage.font_right = payload.font_right

    commit_or_error(db, "update passage")
    db.refresh(passage)
    return passage


def delete_passage(db: Session, passage_id: int) -> None:
    """Delete by primary key; a missing row is not an error."""
    db.query(models.Passage).filter(models.Passage.id == passage_id).delete(synchronize_session=False)
    commit_or_error(db, "delete passage")


def get_passage(db: Session, passage_id: int) -> models.Passage:
    passage = db.query(models.Passage).filter(models.Passage.id == passage_id).first()
    if not passage:
        raise StudyError(404, "Passage not found")
    return passage


def list_passages(db: Session, study_text_id: int) -> List[models.Passage]:
    passages = (
        db.query(models.Passage)
        .filter(models.Passage.study_text_id == study_text_id)
        .order_by(models.Passage.order.asc(), models.Passage.id.asc())
        .all()
    )
    return passages
