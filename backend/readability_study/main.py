import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from readability_study.core.config import load_settings
from readability_study.db.session import SessionLocal, get_db, init_db
from readability_study.schemas.admin import (
    MutationResponse,
    PassageCreateRequest,
    PassageUpdateRequest,
    QuizQuestionCreateRequest,
    QuizQuestionUpdateRequest,
    StudyTextCreateRequest,
    StudyTextUpdateRequest,
)
from readability_study.schemas.common import INT64_MAX, INT64_MIN
from readability_study.schemas.ingest import (
    AccuracyCreateRequest,
    CalibrationCreateRequest,
    CreatedResponse,
    GazePointCreateRequest,
    ParticipantCreatedResponse,
    ParticipantCreateRequest,
    QuizResponseCreateRequest,
    ReadingEventCreateRequest,
    SessionCreatedResponse,
    SessionCreateRequest,
)
from readability_study.schemas.statistics import StatisticsResponse
from readability_study.services import ingest_service, passage_service, quiz_question_service
from readability_study.services.errors import StudyError
from readability_study.services.seed_service import seed_initial_data
from readability_study.services.statistics_service import build_statistics
from readability_study.services.study_text_service import (
    create_study_text,
    list_study_texts,
    resolve_study_text,
    serialize_study_text,
    update_study_text,
)

settings = load_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Readability Study Backend", docs_url="/api-docs", redoc_url="/api-redoc")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error_response(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


@app.exception_handler(StudyError)
async def handle_study_error(request: Request, exc: StudyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    verb = "fetch" if request.method == "GET" else "process"
    resource = request.url.path.rstrip("/").rsplit("/", 1)[-1].replace("-", " ")
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _error_response(500, f"Failed to {verb} {resource}: {exc}")


@app.exception_handler(RequestValidationError)
async def handle_invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        cause = (error.get("ctx") or {}).get("error")
        if cause:
            message = f"{message} ({cause})"
        problems.append(f"{location}: {message}" if location else message)
    return _error_response(400, "Invalid JSON: " + "; ".join(problems))


@app.on_event("startup")
def prepare_database():
    if settings.auto_create_tables:
        init_db()
    if settings.seed_on_startup:
        db = SessionLocal()
        try:
            seed_initial_data(db)
        finally:
            db.close()


def _optional_id(raw: Optional[str], name: str) -> Optional[int]:
    value = (raw or "").strip()
    if not value:
        return None
    try:
        parsed = int(value)
    except ValueError:
        raise StudyError(400, f"Invalid {name} parameter") from None
    if not INT64_MIN <= parsed <= INT64_MAX:
        raise StudyError(400, f"Invalid {name} parameter")
    return parsed


def _required_id(raw: Optional[str]) -> int:
    value = _optional_id(raw, "ID")
    if value is None:
        raise StudyError(400, "ID parameter is required")
    return value


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/participant", status_code=201, response_model=ParticipantCreatedResponse)
def create_participant(payload: ParticipantCreateRequest, db: Session = Depends(get_db)):
    participant = ingest_service.record_participant(db, payload)
    return {"success": True, "id": participant.id, "source": participant.source}


@app.post("/api/session", status_code=201, response_model=SessionCreatedResponse)
def create_session(payload: SessionCreateRequest, db: Session = Depends(get_db)):
    session = ingest_service.record_session(db, payload)
    return {"success": True, "session_id": session.session_id, "id": session.id}


@app.post("/api/quiz-response", status_code=201, response_model=CreatedResponse)
def create_quiz_response(payload: QuizResponseCreateRequest, db: Session = Depends(get_db)):
    response = ingest_service.record_quiz_response(db, payload)
    return {"success": True, "id": response.id}


@app.post("/api/calibration", status_code=201, response_model=CreatedResponse)
def create_calibration(payload: CalibrationCreateRequest, db: Session = Depends(get_db)):
    calibration = ingest_service.record_calibration(db, payload)
    return {"success": True, "id": calibration.id}


@app.post("/api/gaze-point", status_code=201, response_model=CreatedResponse)
def create_gaze_point(payload: GazePointCreateRequest, db: Session = Depends(get_db)):
    point = ingest_service.record_gaze_point(db, payload)
    return {"success": True, "id": point.id}


@app.post("/api/reading-event", status_code=201, response_model=CreatedResponse)
def create_reading_event(payload: ReadingEventCreateRequest, db: Session = Depends(get_db)):
    event = ingest_service.record_reading_event(db, payload)
    return {"success": True, "id": event.id}


@app.post("/api/accuracy", status_code=201, response_model=CreatedResponse)
def create_accuracy(payload: AccuracyCreateRequest, db: Session = Depends(get_db)):
    measurement = ingest_service.record_accuracy(db, payload)
    return {"success": True, "id": measurement.id}


@app.get("/api/study-text")
def get_study_text(version: Optional[str] = None, db: Session = Depends(get_db)):
    return resolve_study_text(db, version)


@app.get("/api/quiz-questions")
def get_quiz_questions(
    study_text_id: Optional[str] = None,
    passage_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return quiz_question_service.list_public_questions(
        db,
        passage_id=_optional_id(passage_id, "passage_id"),
        study_text_id=_optional_id(study_text_id, "study_text_id"),
    )


@app.post("/api/admin/study-text", status_code=201, response_model=MutationResponse)
def admin_create_study_text(payload: StudyTextCreateRequest, db: Session = Depends(get_db)):
    study_text, created = create_study_text(db, payload)
    if not created:
        return JSONResponse(
            status_code=200,
            content={
                "success": True,
                "id": study_text.id,
                "message": "Study text with this version already exists",
            },
        )
    return {"success": True, "id": study_text.id, "message": "Study text created successfully"}


@app.put("/api/admin/study-text", response_model=MutationResponse)
def admin_update_study_text(payload: StudyTextUpdateRequest, db: Session = Depends(get_db)):
    study_text = update_study_text(db, payload)
    return {"success": True, "id": study_text.id, "message": "Study text updated successfully"}


@app.get("/api/admin/study-text")
def admin_list_study_texts(db: Session = Depends(get_db)):
    return {"success": True, "data": [serialize_study_text(item) for item in list_study_texts(db)]}


@app.post("/api/admin/passage", status_code=201, response_model=MutationResponse)
def admin_create_passage(payload: PassageCreateRequest, db: Session = Depends(get_db)):
    passage = passage_service.create_passage(db, payload)
    return {"success": True, "id": passage.id, "message": "Passage created successfully"}


@app.put("/api/admin/passage", response_model=MutationResponse)
def admin_update_passage(payload: PassageUpdateRequest, db: Session = Depends(get_db)):
    passage = passage_service.update_passage(db, payload)
    return {"success": True, "id": passage.id, "message": "Passage updated successfully"}


@app.delete("/api/admin/passage")
def admin_delete_passage(id: Optional[str] = None, db: Session = Depends(get_db)):
    passage_service.delete_passage(db, _required_id(id))
    return {"success": True, "message": "Passage deleted successfully"}


@app.get("/api/admin/passage")
def admin_get_passages(
    id: Optional[str] = None,
    study_text_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    passage_id = _optional_id(id, "ID")
    if passage_id is not None:
        passage = passage_service.get_passage(db, passage_id)
        return {"success": True, "data": passage_service.serialize_passage(passage)}
    text_id = _optional_id(study_text_id, "study_text_id")
    if text_id is not None:
        passages = passage_service.list_passages(db, text_id)
        return {"success": True, "data": [passage_service.serialize_passage(item) for item in passages]}
    raise StudyError(400, "Either id or study_text_id parameter is required")


@app.post("/api/admin/quiz-question", status_code=201, response_model=MutationResponse)
def admin_create_quiz_question(payload: QuizQuestionCreateRequest, db: Session = Depends(get_db)):
    question = quiz_question_service.create_question(db, payload)
    return {"success": True, "id": question.id, "message": "Quiz question created successfully"}


@app.put("/api/admin/quiz-question", response_model=MutationResponse)
def admin_update_quiz_question(payload: QuizQuestionUpdateRequest, db: Session = Depends(get_db)):
    question = quiz_question_service.update_question(db, payload)
    return {"success": True, "id": question.id, "message": "Quiz question updated successfully"}


@app.delete("/api/admin/quiz-question")
def admin_delete_quiz_question(id: Optional[str] = None, db: Session = Depends(get_db)):
    quiz_question_service.delete_question(db, _required_id(id))
    return {"success": True, "message": "Quiz question deleted successfully"}


@app.get("/api/admin/quiz-question")
def admin_get_quiz_questions(
    id: Optional[str] = None,
    passage_id: Optional[str] = None,
    study_text_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    question_id = _optional_id(id, "ID")
    if question_id is not None:
        question = quiz_question_service.get_question(db, question_id)
        return {"success": True, "data": quiz_question_service.serialize_question(question)}

    linked_passage = _optional_id(passage_id, "passage_id")
    if linked_passage is not None:
        questions = quiz_question_service.list_questions_for_passage(db, linked_passage)
    else:
        text_id = _optional_id(study_text_id, "study_text_id")
        if text_id is None:
            raise StudyError(400, "Either id, passage_id, or study_text_id parameter is required")
        questions = quiz_question_service.list_questions_for_study_text(db, text_id)
    return {"success": True, "data": [quiz_question_service.serialize_question(item) for item in questions]}


@app.get("/api/admin/statistics", response_model=StatisticsResponse)
def admin_statistics(db: Session = Depends(get_db)):
    return {"success": True, "data": build_statistics(db)}
