import os
import sys
import uuid

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from readability_study.db import models
from readability_study.db.session import SessionLocal, init_db
from readability_study.services.quiz_question_service import dump_choices


def main() -> None:
    version = f"verify-{uuid.uuid4().hex[:8]}"
    init_db()
    db = SessionLocal()
    try:
        study_text = models.StudyText(
            version=version,
            content="Sample content.",
            font_left="serif",
            font_right="sans",
            active=False,
        )
        db.add(study_text)
        db.flush()

        passage = models.Passage(
            study_text_id=study_text.id,
            order=0,
            title="Sample",
            content="Sample passage.",
        )
        db.add(passage)
        db.flush()

        question = models.QuizQuestion(
            study_text_id=study_text.id,
            passage_id=passage.id,
            question_id="verify-q1",
            prompt="Sample question?",
            choices=dump_choices(["A", "B", "C", "D"]),
            answer=0,
            order=1,
        )
        db.add(question)
        db.commit()

        loaded_text = db.query(models.StudyText).filter(models.StudyText.version == version).first()
        loaded_question = (
            db.query(models.QuizQuestion)
            .filter(models.QuizQuestion.study_text_id == study_text.id)
            .first()
        )

        print(
            "study_text_id={study_text_id} passages={passages} question_id={question_id} version={version}".format(
                study_text_id=loaded_text.id if loaded_text else None,
                passages=len(loaded_text.passages) if loaded_text else 0,
                question_id=loaded_question.id if loaded_question else None,
                version=version,
            )
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
