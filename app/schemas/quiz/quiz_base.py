from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional


class QuestionConfig(BaseModel):
    points: Optional[int] = None


class GenerationRequest(BaseModel):
    topic: Optional[str] = None
    num_questions: Optional[int] = Field(None, gt=0)
    duration: Optional[int] = Field(None, gt=0)  # minutes
    question_configs: List[QuestionConfig] = []


class ManualQuestionIn(BaseModel):
    question_text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4)
    correct_answer: str
    points: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def question_is_usable(self):
        # stored as given, so anything the sanitizer would repair is refused here
        if not self.question_text.strip():
            raise ValueError("question_text must not be blank")
        if any(not option.strip() for option in self.options):
            raise ValueError("options must not be blank")
        if len(set(self.options)) != len(self.options):
            raise ValueError("options must be unique")
        if self.correct_answer not in self.options:
            raise ValueError("correct_answer must be one of the options")
        return self


class ManualQuizCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    duration: int = Field(10, gt=0)
    questions: List[ManualQuestionIn] = Field(..., min_length=1)


class QuestionOut(BaseModel):
    id: UUID
    position: int
    question_text: str
    question_type: str
    options: List[str]
    correct_answer: str
    points: int

    model_config = ConfigDict(from_attributes=True)


class QuizSummaryOut(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    duration: int
    total_points: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuizOut(QuizSummaryOut):
    status: str
    questions: List[QuestionOut]


class SessionOut(BaseModel):
    id: UUID
    quiz_id: UUID
    start_time: datetime
    end_time: datetime
    is_active: bool
    join_code: str

    model_config = ConfigDict(from_attributes=True)


class HostedQuizOut(BaseModel):
    success: bool = True
    quiz_id: UUID
    session_id: UUID
    join_code: str
    start_time: datetime
    end_time: datetime
    total_points: int
    question_count: int
    dropped_questions: int = 0
    message: str


class RehostOut(BaseModel):
    success: bool = True
    quiz_id: UUID
    session_id: UUID
    join_code: str
    start_time: datetime
    end_time: datetime
