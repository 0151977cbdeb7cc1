from typing import List, Optional

from pydantic import BaseModel, Field

from .common import StoredInt


class StudyTextCreateRequest(BaseModel):
    version: Optional[str] = None
    content: Optional[str] = None
    font_left: Optional[str] = None
    font_right: Optional[str] = None
    active: bool = False


class StudyTextUpdateRequest(BaseModel):
    id: StoredInt = 0
    version: Optional[str] = None
    content: Optional[str] = None
    font_left: Optional[str] = None
    font_right: Optional[str] = None
    active: Optional[bool] = None


class PassageCreateRequest(BaseModel):
    study_text_id: StoredInt = 0
    order: Optional[StoredInt] = None
    title: Optional[str] = None
    content: Optional[str] = None
    font_left: Optional[str] = None
    font_right: Optional[str] = None


class PassageUpdateRequest(BaseModel):
    id: StoredInt = 0
    order: Optional[StoredInt] = None
    title: Optional[str] = None
    content: Optional[str] = None
    font_left: Optional[str] = None
    font_right: Optional[str] = None


class QuizQuestionCreateRequest(BaseModel):
    study_text_id: StoredInt = 0
    passage_id: Optional[StoredInt] = None
    question_id: Optional[str] = None
    prompt: Optional[str] = None
    choices: List[str] = Field(default_factory=list)
    answer: StoredInt = 0
    order: StoredInt = 0


class QuizQuestionUpdateRequest(BaseModel):
    """Partial update; ``passage_id`` counts as provided even when sent as null."""

    id: StoredInt = 0
    passage_id: Optional[StoredInt] = None
    question_id: Optional[str] = None
    prompt: Optional[str] = None
    choices: Optional[List[str]] = None
    answer: Optional[StoredInt] = None
    order: Optional[StoredInt] = None


class MutationResponse(BaseModel):
    success: bool = True
    id: Optional[int] = None
    message: str
