from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from readability_study.db import models
from readability_study.schemas.ingest import (
    AccuracyCreateRequest,
    CalibrationCreateRequest,
    GazePointCreateRequest,
    ParticipantCreateRequest,
    QuizResponseCreateRequest,
    ReadingEventCreateRequest,
    SessionCreateRequest,
)

from .errors import commit_or_error

DEFAULT_SOURCE = "web"
UNIX_EPOCH = datetime(1970, 1, 1)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _is_zero_time(value: Optional[datetime]) -> bool:
    # clients serialising an unset timestamp send 0001-01-01T00:00:00Z or 0
    if value is None or value.year <= 1:
        return True
    return _to_naive_utc(value) == UNIX_EPOCH


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_timestamp(value: Optional[datetime]) -> datetime:
    """Stored timestamps are naive UTC; an absent or zero value means "now"."""
    if _is_zero_time(value):
        return utc_now()
    return _to_naive_utc(value)


def _persist(db: Session, row: Any, label: str) -> Any:
    db.add(row)
    commit_or_error(db, f"save {label}")
    db.refresh(row)
    return row


def record_participant(db: Session, payload: ParticipantCreateRequest) -> models.Participant:
    participant = models.Participant(source=payload.source or DEFAULT_SOURCE)
    return _persist(db, participant, "participant")


def record_session(db: Session, payload: SessionCreateRequest) -> models.StudySession:
    data: Dict[str, Any] = payload.model_dump()
    for key in ("time_left_ms", "time_right_ms", "time_a_ms", "time_b_ms"):
        data[key] = data[key] or 0
    return _persist(db, models.StudySession(**data), "session")


def record_quiz_response(db: Session, payload: QuizResponseCreateRequest) -> models.QuizResponse:
    response = models.QuizResponse(
        session_id=payload.session_id,
        question_id=payload.question_id or "",
        answer_index=payload.answer_index,
        is_correct=bool(payload.is_correct),
        response_time=payload.response_time,
        timestamp=resolve_timestamp(payload.timestamp),
    )
    return _persist(db, response, "quiz response")


def record_calibration(db: Session, payload: CalibrationCreateRequest) -> models.CalibrationData:
    calibration = models.CalibrationData(
        session_id=payload.session_id,
        point_index=payload.point_index,
        click_number=payload.click_number,
        x=payload.x,
        y=payload.y,
        timestamp=resolve_timestamp(payload.timestamp),
    )
    return _persist(db, calibration, "calibration data")


def record_gaze_point(db: Session, payload: GazePointCreateRequest) -> models.GazePoint:
    point = models.GazePoint(
        session_id=payload.session_id,
        x=payload.x,
        y=payload.y,
        panel=payload.panel,
        phase=payload.phase,
        timestamp=resolve_timestamp(payload.timestamp),
    )
    return _persist(db, point, "gaze point")


def record_reading_event(db: Session, payload: ReadingEventCreateRequest) -> models.ReadingEvent:
    event = models.ReadingEvent(
        session_id=payload.session_id,
        event_type=payload.event_type,
        panel=payload.panel,
        duration=payload.duration,
        timestamp=resolve_timestamp(payload.timestamp),
    )
    return _persist(db, event, "reading event")


def record_accuracy(db: Session, payload: AccuracyCreateRequest) -> models.AccuracyMeasurement:
    measurement = models.AccuracyMeasurement(
        session_id=payload.session_id,
        accuracy=payload.accuracy or 0.0,
        duration=payload.duration,
        passed=bool(payload.passed),
        timestamp=resolve_timestamp(payload.timestamp),
    )
    return _persist(db, measurement, "accuracy measurement")
