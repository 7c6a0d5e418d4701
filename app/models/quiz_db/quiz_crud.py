from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.quiz_db.question_db import Question, MULTIPLE_CHOICE
from app.models.quiz_db.quiz_db import Quiz, QUIZ_STATUS_DRAFT, QUIZ_STATUS_PUBLISHED
from app.models.quiz_db.session_db import QuizSession


def create_quiz(db: Session, title: str, description: Optional[str], created_by: UUID, duration: int) -> Quiz:
    quiz = Quiz(
        title=title,
        description=description,
        created_by=created_by,
        duration=duration,
        total_points=0,
        status=QUIZ_STATUS_DRAFT,
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    return quiz


def bulk_create_questions(db: Session, quiz_id: UUID, drafts) -> List[Question]:
    questions = [
        Question(
            quiz_id=quiz_id,
            position=position,
            question_text=draft.question_text,
            question_type=MULTIPLE_CHOICE,
            options=list(draft.options),
            correct_answer=draft.correct_answer,
            points=draft.points,
        )
        for position, draft in enumerate(drafts)
    ]
    db.add_all(questions)
    db.commit()
    return questions


def recompute_total_points(db: Session, quiz: Quiz) -> int:
    total = (
        db.query(func.coalesce(func.sum(Question.points), 0))
        .filter(Question.quiz_id == quiz.id)
        .scalar()
    )
    quiz.total_points = int(total)
    db.commit()
    db.refresh(quiz)
    return quiz.total_points


def publish_quiz(db: Session, quiz: Quiz) -> Quiz:
    quiz.status = QUIZ_STATUS_PUBLISHED
    db.commit()
    db.refresh(quiz)
    return quiz


def get_quiz(db: Session, quiz_id: UUID) -> Optional[Quiz]:
    return db.query(Quiz).filter(Quiz.id == quiz_id).first()


def get_published_quiz(db: Session, quiz_id: UUID) -> Optional[Quiz]:
    return (
        db.query(Quiz)
        .filter(Quiz.id == quiz_id, Quiz.status == QUIZ_STATUS_PUBLISHED)
        .first()
    )


def list_quizzes_by_user(db: Session, user_id: UUID) -> List[Quiz]:
    return (
        db.query(Quiz)
        .filter(Quiz.created_by == user_id, Quiz.status == QUIZ_STATUS_PUBLISHED)
        .order_by(Quiz.created_at.desc())
        .all()
    )


def list_sessions_for_quiz(db: Session, quiz_id: UUID) -> List[QuizSession]:
    return (
        db.query(QuizSession)
        .filter(QuizSession.quiz_id == quiz_id)
        .order_by(QuizSession.start_time.desc())
        .all()
    )


def join_code_in_use(db: Session, join_code: str) -> bool:
    return (
        db.query(QuizSession.id)
        .filter(QuizSession.join_code == join_code, QuizSession.is_active.is_(True))
        .first()
        is not None
    )


def find_stale_drafts(db: Session, created_before: datetime) -> List[Quiz]:
    return (
        db.query(Quiz)
        .filter(Quiz.status == QUIZ_STATUS_DRAFT, Quiz.created_at < created_before)
        .all()
    )


def find_expired_sessions(db: Session, now: datetime) -> List[QuizSession]:
    return (
        db.query(QuizSession)
        .filter(QuizSession.is_active.is_(True), QuizSession.end_time <= now)
        .all()
    )
