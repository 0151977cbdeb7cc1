import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from readability_study.db import models
from readability_study.schemas.admin import QuizQuestionCreateRequest, QuizQuestionUpdateRequest

from .errors import StudyError, commit_or_error
from .study_text_service import get_active_study_text

logger = logging.getLogger(__name__)


def dump_choices(choices: Optional[List[str]]) -> str:
    return json.dumps(list(choices or []), ensure_ascii=False)


def parse_choices(question: models.QuizQuestion) -> Optional[List[str]]:
    """Decode the stored choices column, or ``None`` if it is not a JSON string array."""
    try:
        choices = json.loads(question.choices or "")
    except (TypeError, ValueError) as exc:
        logger.warning("Error decoding choices for question %s: %s", question.question_id, exc)
        return None
    if not isinstance(choices, list) or not all(isinstance(item, str) for item in choices):
        logger.warning("Choices for question %s are not a list of strings", question.question_id)
        return None
    return choices


def serialize_question(question: models.QuizQuestion) -> Dict[str, Any]:
    return {
        "id": question.id,
        "study_text_id": question.study_text_id,
        "passage_id": question.passage_id,
        "question_id": question.question_id,
        "prompt": question.prompt,
        "choices": parse_choices(question) or [],
        "answer": question.answer,
        "order": question.order,
    }


def _ordered(query):
    return query.order_by(models.QuizQuestion.order.asc(), models.QuizQuestion.id.asc())


def list_public_questions(
    db: Session,
    passage_id: Optional[int] = None,
    study_text_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Questions shown to participants.

    A passage id selects that passage's questions; otherwise the study-text-level
    questions (no passage) of the given or currently active text are returned.
    Questions whose stored choices cannot be decoded are left out.
    """
    query = db.query(models.QuizQuestion)
    if passage_id is not None:
        query = query.filter(models.QuizQuestion.passage_id == passage_id)
    else:
        if study_text_id is None:
            study_text = get_active_study_text(db)
            if not study_text:
                raise StudyError(404, "No active study text found")
            study_text_id = study_text.id
        query = query.filter(
            models.QuizQuestion.study_text_id == study_text_id,
            models.QuizQuestion.passage_id.is_(None),
        )

    items: List[Dict[str, Any]] = []
    for question in _ordered(query).all():
        choices = parse_choices(question)
        if choices is None:
            continue
        items.append(
            {
                "id": question.question_id,
                "prompt": question.prompt,
                "choices": choices,
                "answer": question.answer,
            }
        )
    return items


def _check_passage(db: Session, passage_id: int, study_text_id: int, message: str) -> None:
    passage = (
        db.query(models.Passage)
        .filter(models.Passage.id == passage_id, models.Passage.study_text_id == study_text_id)
        .first()
    )
    if not passage:
        raise StudyError(404, message)


def create_question(db: Session, payload: QuizQuestionCreateRequest) -> models.QuizQuestion:
    if not payload.study_text_id or not payload.question_id or not payload.prompt:
        raise StudyError(400, "study_text_id, question_id, and prompt are required")

    study_text = (
        db.query(models.StudyText).filter(models.StudyText.id == payload.study_text_id).first()
    )
    if not study_text:
        raise StudyError(404, "Study text not found")

    passage_id = payload.passage_id or None
    if passage_id:
        _check_passage(
            db,
            passage_id,
            payload.study_text_id,
            "Passage not found or does not belong to the specified study text",
        )

    question = models.QuizQuestion(
        study_text_id=payload.study_text_id,
        passage_id=passage_id,
        question_id=payload.question_id,
        prompt=payload.prompt,
        choices=dump_choices(payload.choices),
        answer=payload.answer,
        order=payload.order,
    )
    db.add(question)
    commit_or_error(db, "create quiz question")
    db.refresh(question)
    return question


def update_question(db: Session, payload: QuizQuestionUpdateRequest) -> models.QuizQuestion:
    if not payload.id:
        raise StudyError(400, "ID is required")

    question = get_question(db, payload.id)

    # an explicit null (or 0) unlinks the question from its passage
    if "passage_id" in payload.model_fields_set:
        passage_id = payload.passage_id or None
        if passage_id:
            _check_passage(
                db,
                passage_id,
                question.study_text_id,
                "Passage not found or does not belong to the study text",
            )
        question.passage_id = passage_id

    if payload.question_id:
        question.question_id = payload.question_id
    if payload.prompt:
        question.prompt = payload.prompt
    if payload.choices is not None:
        question.choices = dump_choices(payload.choices)
    if payload.answer is not None:
        question.answer = payload.answer
    if payload.order is not None:
        question.order = payload.order

    commit_or_error(db, "update quiz question")
    db.refresh(question)
    return question


def delete_question(db: Session, question_id: int) -> None:
    db.query(models.QuizQuestion).filter(models.QuizQuestion.id == question_id).delete(
        synchronize_session=False
    )
    commit_or_error(db, "delete quiz question")


def get_question(db: Session, question_id: int) -> models.QuizQuestion:
    question = db.query(models.QuizQuestion).filter(models.QuizQuestion.id == question_id).first()
    if not question:
        raise StudyError(404, "Quiz question not found")
    return question


def list_questions_for_passage(db: Session, passage_id: int) -> List[models.QuizQuestion]:
    query = db.query(models.QuizQuestion).filter(models.QuizQuestion.passage_id == passage_id)
    return _ordered(query).all()


def list_questions_for_study_text(db: Session, study_text_id: int) -> List[models.QuizQuestion]:
    """All questions of a text, passage-linked ones included."""
    query = db.query(models.QuizQuestion).filter(models.QuizQuestion.study_text_id == study_text_id)
    return _ordered(query).all()
