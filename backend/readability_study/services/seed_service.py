import logging
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from readability_study.db import models

from .quiz_question_service import dump_choices

logger = logging.getLogger(__name__)

DEFAULT_STUDY_TEXT = (
    "Reading is a complex cognitive process that involves decoding symbols to derive meaning.\n"
    "This brief passage is used purely for testing font readability and basic comprehension.\n"
    "Try to read at a natural pace without skimming, and focus on understanding the content."
)

DEFAULT_QUESTIONS: List[Dict[str, Any]] = [
    {
        "question_id": "q1",
        "prompt": "What is the purpose of this passage?",
        "choices": [
            "To teach advanced speed-reading",
            "To test font readability and comprehension",
            "To explain eye-tracking algorithms",
            "To measure typing accuracy",
        ],
        "answer": 1,
    },
    {
        "question_id": "q2",
        "prompt": "How should you read the passage?",
        "choices": [
            "As quickly as possible without understanding",
            "Only the first sentence",
            "At a natural pace focusing on understanding",
            "Backwards to test attention",
        ],
        "answer": 2,
    },
    {
        "question_id": "q3",
        "prompt": "According to the passage, what does reading involve?",
        "choices": [
            "Only recognizing letters",
            "Decoding symbols to derive meaning",
            "Memorizing text word-for-word",
            "Counting words per minute",
        ],
        "answer": 1,
    },
    {
        "question_id": "q4",
        "prompt": "What should you avoid when reading this passage?",
        "choices": [
            "Reading at a natural pace",
            "Focusing on understanding",
            "Skimming through the content",
            "Decoding the symbols",
        ],
        "answer": 2,
    },
    {
        "question_id": "q5",
        "prompt": 'What is described as a "complex cognitive process"?',
        "choices": ["Writing", "Reading", "Speaking", "Listening"],
        "answer": 1,
    },
]


def is_seeded(db: Session) -> bool:
    return (db.query(func.count(models.StudyText.id)).scalar() or 0) > 0


def seed_initial_data(db: Session) -> bool:
    """Insert the default study text and its questions into an empty store.

    Returns ``True`` when rows were written.
    """
    if is_seeded(db):
        logger.info("Study text already present, skipping seed")
        return False

    study_text = models.StudyText(
        version="default",
        content=DEFAULT_STUDY_TEXT,
        font_left="serif",
        font_right="sans",
        active=True,
    )
    try:
        db.add(study_text)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Error creating study text: %s", exc)
        return False
    db.refresh(study_text)

    for order, item in enumerate(DEFAULT_QUESTIONS, start=1):
        question = models.QuizQuestion(
            study_text_id=study_text.id,
            question_id=item["question_id"],
            prompt=item["prompt"],
            choices=dump_choices(item["choices"]),
            answer=item["answer"],
            order=order,
        )
        try:
            db.add(question)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error creating quiz question %s: %s", item["question_id"], exc)

    logger.info("Initial study data seeded successfully")
    return True
