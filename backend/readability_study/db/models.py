from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from .session import Base


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True)
    source = Column(String(64), nullable=False, default="web")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)


class StudySession(Base):
    __tablename__ = "study_sessions"

    id = Column(Integer, primary_key=True)
    participant_id = Column(Integer, nullable=True, index=True)
    session_id = Column(String(64), nullable=True, index=True)
    calibration_points = Column(Integer, nullable=True)
    font_left = Column(String(32), nullable=True)
    font_right = Column(String(32), nullable=True)
    time_left_ms = Column(Integer, nullable=False, default=0)
    time_right_ms = Column(Integer, nullable=False, default=0)
    time_a_ms = Column(Integer, nullable=False, default=0)
    time_b_ms = Column(Integer, nullable=False, default=0)
    font_preference = Column(String(32), nullable=True)
    preferred_font_type = Column(String(32), nullable=True, index=True)
    quiz_responses_json = Column(Text, nullable=True)
    user_agent = Column(String(512), nullable=True)
    screen_width = Column(Integer, nullable=True)
    screen_height = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class CalibrationData(Base):
    __tablename__ = "calibration_data"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, nullable=True, index=True)
    point_index = Column(Integer, nullable=True)
    click_number = Column(Integer, nullable=True)
    x = Column(Float, nullable=True)
    y = Column(Float, nullable=True)
    timestamp = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class AccuracyMeasurement(Base):
    __tablename__ = "accuracy_measurements"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, nullable=True, index=True)
    accuracy = Column(Float, nullable=False, default=0.0)
    duration = Column(Integer, nullable=True)
    passed = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class QuizResponse(Base):
    __tablename__ = "quiz_responses"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, nullable=True, index=True)
    question_id = Column(String(64), nullable=False, default="", index=True)
    answer_index = Column(Integer, nullable=True)
    is_correct = Column(Boolean, nullable=False, default=False)
    response_time = Column(Integer, nullable=True)
    timestamp = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class GazePoint(Base):
    __tablename__ = "gaze_points"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, nullable=True, index=True)
    x = Column(Float, nullable=True)
    y = Column(Float, nullable=True)
    phase = Column(String(32), nullable=True)
    panel = Column(String(32), nullable=True)
    timestamp = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class ReadingEvent(Base):
    __tablename__ = "reading_events"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, nullable=True, index=True)
    event_type = Column(String(64), nullable=True)
    panel = Column(String(32), nullable=True)
    duration = Column(Integer, nullable=True)
    timestamp = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class StudyText(Base):
    __tablename__ = "study_texts"

    id = Column(Integer, primary_key=True)
    version = Column(String(64), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False, default="")
    font_left = Column(String(32), nullable=False, default="serif")
    font_right = Column(String(32), nullable=False, default="sans")
    active = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    passages = relationship("Passage", back_populates="study_text", order_by="Passage.order")


class Passage(Base):
    __tablename__ = "passages"

    id = Column(Integer, primary_key=True)
    study_text_id = Column(Integer, ForeignKey("study_texts.id"), nullable=False, index=True)
    order = Column("order", Integer, nullable=False, default=0)
    content = Column(Text, nullable=False)
    title = Column(String(255), nullable=True)
    font_left = Column(String(32), nullable=True)
    font_right = Column(String(32), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    study_text = relationship("StudyText", back_populates="passages")


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True)
    study_text_id = Column(Integer, ForeignKey("study_texts.id"), nullable=False, index=True)
    passage_id = Column(Integer, ForeignKey("passages.id"), nullable=True, index=True)
    question_id = Column(String(64), nullable=False)
    prompt = Column(Text, nullable=False)
    choices = Column(Text, nullable=False, default="[]")
    answer = Column(Integer, nullable=False, default=0)
    order = Column("order", Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
