from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .common import StoredInt


class ParticipantCreateRequest(BaseModel):
    source: Optional[str] = None


class SessionCreateRequest(BaseModel):
    participant_id: Optional[StoredInt] = None
    session_id: Optional[str] = None
    calibration_points: Optional[StoredInt] = None
    font_left: Optional[str] = None
    font_right: Optional[str] = None
    time_left_ms: Optional[StoredInt] = None
    time_right_ms: Optional[StoredInt] = None
    time_a_ms: Optional[StoredInt] = None
    time_b_ms: Optional[StoredInt] = None
    font_preference: Optional[str] = None
    preferred_font_type: Optional[str] = None
    quiz_responses_json: Optional[str] = None
    user_agent: Optional[str] = None
    screen_width: Optional[StoredInt] = None
    screen_height: Optional[StoredInt] = None


class QuizResponseCreateRequest(BaseModel):
    session_id: Optional[StoredInt] = None
    question_id: Optional[str] = None
    answer_index: Optional[StoredInt] = None
    is_correct: Optional[bool] = None
    response_time: Optional[StoredInt] = None
    timestamp: Optional[datetime] = None


class CalibrationCreateRequest(BaseModel):
    session_id: Optional[StoredInt] = None
    point_index: Optional[StoredInt] = None
    click_number: Optional[StoredInt] = None
    x: Optional[float] = None
    y: Optional[float] = None
    timestamp: Optional[datetime] = None


class AccuracyCreateRequest(BaseModel):
    session_id: Optional[StoredInt] = None
    accuracy: Optional[float] = None
    duration: Optional[StoredInt] = None
    passed: Optional[bool] = None
    timestamp: Optional[datetime] = None


class GazePointCreateRequest(BaseModel):
    session_id: Optional[StoredInt] = None
    x: Optional[float] = None
    y: Optional[float] = None
    panel: Optional[str] = None
    phase: Optional[str] = None
    timestamp: Optional[datetime] = None


class ReadingEventCreateRequest(BaseModel):
    session_id: Optional[StoredInt] = None
    event_type: Optional[str] = None
    panel: Optional[str] = None
    duration: Optional[StoredInt] = None
    timestamp: Optional[datetime] = None


class CreatedResponse(BaseModel):
    success: bool = True
    id: int


class ParticipantCreatedResponse(CreatedResponse):
    source: str


class SessionCreatedResponse(CreatedResponse):
    session_id: Optional[str] = None
