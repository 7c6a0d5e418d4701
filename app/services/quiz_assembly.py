"""Persist a validated question set as a hosted quiz.

The quiz row is written first as a draft and only published once its
questions, point total and first session exist. A failure part-way leaves
the draft behind for ``draft_reconciler`` instead of rolling back rows that
were already committed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import PersistenceError
from app.models.quiz_db import quiz_crud
from app.models.quiz_db.quiz_db import Quiz
from app.models.quiz_db.session_db import QuizSession
from app.services.question_sanitizer import QuestionDraft
from app.services.session_policy import create_session, generate_join_code


logger = logging.getLogger(__name__)


@dataclass
class AssembledQuiz:
    quiz: Quiz
    session: QuizSession


def _persist_step(db: Session, step: str, action: Callable, *args):
    try:
        return action(db, *args)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Persisting quiz failed at step %s: %s", step, exc)
        raise PersistenceError(f"could not persist quiz ({step})", step=step) from exc


def assemble_quiz(
    db: Session,
    *,
    title: str,
    description: Optional[str],
    created_by: UUID,
    duration: int,
    questions: Sequence[QuestionDraft],
    code_factory: Callable[[], str] = generate_join_code,
) -> AssembledQuiz:
    quiz = _persist_step(db, "create_quiz", quiz_crud.create_quiz, title, description, created_by, duration)
    _persist_step(db, "create_questions", quiz_crud.bulk_create_questions, quiz.id, questions)
    total = _persist_step(db, "total_points", quiz_crud.recompute_total_points, quiz)

    session = _persist_step(
        db, "create_session",
        lambda session_db: create_session(session_db, quiz.id, quiz.duration, code_factory=code_factory),
    )
    _persist_step(db, "publish", quiz_crud.publish_quiz, quiz)

    logger.info(
        "Quiz %s published with %d questions (%d points), session %s code %s",
        quiz.id, len(questions), total, session.id, session.join_code,
    )
    return AssembledQuiz(quiz=quiz, session=session)
