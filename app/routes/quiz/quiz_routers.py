from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
from app.core.database import get_db
from app.core.errors import QuizNotFound
from app.core.security import get_current_user
from app.models.quiz_db import quiz_crud
from app.models.user_db.user_db import User
from app.schemas.quiz.quiz_base import (
    GenerationRequest,
    HostedQuizOut,
    ManualQuizCreate,
    QuizOut,
    QuizSummaryOut,
    RehostOut,
    SessionOut,
)
from app.services.llm_client import LLMClient, get_llm_client
from app.services.quiz_generation import GenerationOutcome, create_manual_quiz, generate_quiz, rehost_quiz

quiz_router = APIRouter(prefix="/quiz", tags=["Quiz"])


def _hosted(outcome: GenerationOutcome, message: str) -> HostedQuizOut:
    quiz, session = outcome.assembled.quiz, outcome.assembled.session
    return HostedQuizOut(
        quiz_id=quiz.id,
        session_id=session.id,
        join_code=session.join_code,
        start_time=session.start_time,
        end_time=session.end_time,
        total_points=quiz.total_points,
        question_count=len(quiz.questions),
        dropped_questions=outcome.report.dropped,
        message=message,
    )


@quiz_router.post("/generate", response_model=HostedQuizOut, status_code=status.HTTP_201_CREATED)
def generate(
    request: GenerationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    llm: LLMClient = Depends(get_llm_client),
):
    outcome = generate_quiz(db, request, current_user.id, llm)
    return _hosted(outcome, "ai quiz generated successfully")


@quiz_router.post("/", response_model=HostedQuizOut, status_code=status.HTTP_201_CREATED)
def create_quiz(
    quiz_in: ManualQuizCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outcome = create_manual_quiz(db, quiz_in, current_user.id)
    return _hosted(outcome, "quiz created successfully")


@quiz_router.get("/mine", response_model=List[QuizSummaryOut])
def list_my_quizzes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return quiz_crud.list_quizzes_by_user(db, current_user.id)


@quiz_router.post("/{quiz_id}/rehost", response_model=RehostOut, status_code=status.HTTP_201_CREATED)
def rehost(
    quiz_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    session = rehost_quiz(db, quiz_id)
    return RehostOut(
        quiz_id=session.quiz_id,
        session_id=session.id,
        join_code=session.join_code,
        start_time=session.start_time,
        end_time=session.end_time,
    )


@quiz_router.get("/{quiz_id}", response_model=QuizOut)
def get_quiz(quiz_id: UUID, db: Session = Depends(get_db)):
    quiz = quiz_crud.get_published_quiz(db, quiz_id)
    if not quiz:
        raise QuizNotFound("Quiz not found")
    return quiz


@quiz_router.get("/{quiz_id}/sessions", response_model=List[SessionOut])
def list_sessions(quiz_id: UUID, db: Session = Depends(get_db)):
    if not quiz_crud.get_published_quiz(db, quiz_id):
        raise QuizNotFound("Quiz not found")
    return quiz_crud.list_sessions_for_quiz(db, quiz_id)
