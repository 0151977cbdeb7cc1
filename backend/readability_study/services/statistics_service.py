import logging
from typing import Callable, List

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from readability_study.db import models
from readability_study.schemas.statistics import QuestionStats, StatisticsReport

FONT_SERIF = "serif"
FONT_SANS = "sans"
logger = logging.getLogger(__name__)


def _percentage(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(part / total * 100, 2)


def _count(db: Session, model, *criteria) -> int:
    query = db.query(func.count(model.id))
    if criteria:
        query = query.filter(*criteria)
    return int(query.scalar() or 0)


def _collect_participants(db: Session, report: StatisticsReport) -> None:
    report.participants.total = _count(db, models.Participant)
    rows = (
        db.query(models.Participant.source, func.count(models.Participant.id))
        .group_by(models.Participant.source)
        .all()
    )
    report.participants.by_source = {source or "": int(count) for source, count in rows}


def _collect_sessions(db: Session, report: StatisticsReport) -> None:
    report.sessions.total = _count(db, models.StudySession)


def _collect_font_preferences(db: Session, report: StatisticsReport) -> None:
    serif = _count(db, models.StudySession, models.StudySession.preferred_font_type == FONT_SERIF)
    sans = _count(db, models.StudySession, models.StudySession.preferred_font_type == FONT_SANS)
    report.font_preferences.serif = serif
    report.font_preferences.sans = sans
    report.font_preferences.total = serif + sans


def _collect_quiz_performance(db: Session, report: StatisticsReport) -> None:
    performance = report.quiz_performance
    performance.total_responses = _count(db, models.QuizResponse)
    performance.correct_answers = _count(db, models.QuizResponse, models.QuizResponse.is_correct.is_(True))
    performance.average_accuracy = _percentage(performance.correct_answers, performance.total_responses)


def _collect_quiz_by_question(db: Session, report: StatisticsReport) -> None:
    correct_sum = func.sum(case((models.QuizResponse.is_correct.is_(True), 1), else_=0))
    rows = (
        db.query(models.QuizResponse.question_id, func.count(models.QuizResponse.id), correct_sum)
        .group_by(models.QuizResponse.question_id)
        .all()
    )
    by_question = {}
    for question_id, total, correct in rows:
        total = int(total or 0)
        correct = int(correct or 0)
        by_question[question_id or ""] = QuestionStats(
            total=total,
            correct=correct,
            accuracy=_percentage(correct, total),
        )
    report.quiz_performance.by_question = by_question


def _side_times(db: Session, font: str) -> List[int]:
    """Positive reading times of every panel rendered in ``font``, left and right pooled."""
    session = models.StudySession
    left = (
        db.query(session.time_left_ms)
        .filter(session.font_left == font, session.time_left_ms > 0)
        .all()
    )
    right = (
        db.query(session.time_right_ms)
        .filter(session.font_right == font, session.time_right_ms > 0)
        .all()
    )
    return [int(row[0]) for row in left] + [int(row[0]) for row in right]


def _collect_reading_times(db: Session, report: StatisticsReport) -> None:
    session = models.StudySession
    total = _count(db, session, (session.time_left_ms > 0) | (session.time_right_ms > 0))
    report.reading_times.total_sessions = total
    if total == 0:
        return
    serif_times = _side_times(db, FONT_SERIF)
    if serif_times:
        report.reading_times.average_serif_ms = sum(serif_times) / len(serif_times)
    sans_times = _side_times(db, FONT_SANS)
    if sans_times:
        report.reading_times.average_sans_ms = sum(sans_times) / len(sans_times)


def _collect_accuracy(db: Session, report: StatisticsReport) -> None:
    measurement = models.AccuracyMeasurement
    stats = report.accuracy_measurements
    stats.total = _count(db, measurement)
    stats.average_accuracy = float(db.query(func.avg(measurement.accuracy)).scalar() or 0.0)
    stats.passed = _count(db, measurement, measurement.passed.is_(True))
    stats.failed = _count(db, measurement, measurement.passed.is_(False))


def _grouped_nonempty(db: Session, column) -> dict:
    rows = (
        db.query(column, func.count(models.GazePoint.id))
        .filter(column.isnot(None), column != "")
        .group_by(column)
        .all()
    )
    return {value: int(count) for value, count in rows}


def _collect_gaze_points(db: Session, report: StatisticsReport) -> None:
    report.gaze_points.total = _count(db, models.GazePoint)
    report.gaze_points.by_phase = _grouped_nonempty(db, models.GazePoint.phase)
    report.gaze_points.by_panel = _grouped_nonempty(db, models.GazePoint.panel)


def _collect_calibration(db: Session, report: StatisticsReport) -> None:
    report.calibration_data.total = _count(db, models.CalibrationData)


COLLECTORS: List[Callable[[Session, StatisticsReport], None]] = [
    _collect_participants,
    _collect_sessions,
    _collect_font_preferences,
    _collect_quiz_performance,
    _collect_quiz_by_question,
    _collect_reading_times,
    _collect_accuracy,
    _collect_gaze_points,
    _collect_calibration,
]


def build_statistics(db: Session) -> StatisticsReport:
    """Aggregate the study data; a failing section is logged and left at zero."""
    report = StatisticsReport()
    for collector in COLLECTORS:
        try:
            collector(db, report)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Statistics section %s failed: %s", collector.__name__, exc)
    return report
