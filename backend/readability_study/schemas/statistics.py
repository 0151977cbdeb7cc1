from typing import Dict

from pydantic import BaseModel, Field


class ParticipantStats(BaseModel):
    total: int = 0
    by_source: Dict[str, int] = Field(default_factory=dict)


class SessionStats(BaseModel):
    total: int = 0


class FontPreferenceStats(BaseModel):
    serif: int = 0
    sans: int = 0
    total: int = 0


class QuestionStats(BaseModel):
    total: int = 0
    correct: int = 0
    accuracy: float = 0.0


class QuizPerformanceStats(BaseModel):
    total_responses: int = 0
    correct_answers: int = 0
    average_accuracy: float = 0.0
    by_question: Dict[str, QuestionStats] = Field(default_factory=dict)


class ReadingTimeStats(BaseModel):
    average_serif_ms: float = 0.0
    average_sans_ms: float = 0.0
    total_sessions: int = 0


class AccuracyStats(BaseModel):
    total: int = 0
    average_accuracy: float = 0.0
    passed: int = 0
    failed: int = 0


class GazePointStats(BaseModel):
    total: int = 0
    by_phase: Dict[str, int] = Field(default_factory=dict)
    by_panel: Dict[str, int] = Field(default_factory=dict)


class CalibrationStats(BaseModel):
    total: int = 0


class StatisticsReport(BaseModel):
    participants: ParticipantStats = Field(default_factory=ParticipantStats)
    sessions: SessionStats = Field(default_factory=SessionStats)
    font_preferences: FontPreferenceStats = Field(default_factory=FontPreferenceStats)
    quiz_performance: QuizPerformanceStats = Field(default_factory=QuizPerformanceStats)
    reading_times: ReadingTimeStats = Field(default_factory=ReadingTimeStats)
    accuracy_measurements: AccuracyStats = Field(default_factory=AccuracyStats)
    gaze_points: GazePointStats = Field(default_factory=GazePointStats)
    calibration_data: CalibrationStats = Field(default_factory=CalibrationStats)


class StatisticsResponse(BaseModel):
    success: bool = True
    data: StatisticsReport
