"""Entry points of the quiz ingestion pipeline.

raw model text -> normalize -> parse -> sanitize -> assemble (+ session)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InputError, PersistenceError, QuizNotFound
from app.models.quiz_db import quiz_crud
from app.models.quiz_db.session_db import QuizSession
from app.schemas.quiz.quiz_base import GenerationRequest, ManualQuizCreate
from app.services.llm_client import LLMClient, SYSTEM_PROMPT, build_quiz_prompt
from app.services.question_sanitizer import SanitizeReport, sanitize_candidates
from app.services.quiz_assembly import AssembledQuiz, assemble_quiz
from app.services.response_normalizer import normalize_response
from app.services.session_policy import create_session, generate_join_code
from app.services.structure_parser import ParseStage, parse_candidates


logger = logging.getLogger(__name__)


@dataclass
class GenerationOutcome:
    assembled: AssembledQuiz
    report: SanitizeReport
    parse_stage: Optional[ParseStage] = None


def check_request(request: GenerationRequest) -> None:
    if not request.topic or not request.topic.strip() or not request.num_questions:
        raise InputError("missing required fields")
    if request.num_questions > settings.MAX_QUESTIONS_PER_QUIZ:
        raise InputError(f"num_questions must be at most {settings.MAX_QUESTIONS_PER_QUIZ}")


def generate_quiz(
    db: Session,
    request: GenerationRequest,
    user_id: UUID,
    llm: LLMClient,
    code_factory: Callable[[], str] = generate_join_code,
) -> GenerationOutcome:
    check_request(request)
    topic = request.topic.strip()

    raw = llm.complete(SYSTEM_PROMPT, build_quiz_prompt(topic, request.num_questions))
    parsed = parse_candidates(normalize_response(raw))
    sanitized = sanitize_candidates(parsed.items, request.question_configs)

    assembled = assemble_quiz(
        db,
        title=f"ai quiz on {topic}",
        description=f"automatically generated quiz about {topic}",
        created_by=user_id,
        duration=request.duration or settings.DEFAULT_QUIZ_DURATION,
        questions=sanitized.questions,
        code_factory=code_factory,
    )
    return GenerationOutcome(assembled=assembled, report=sanitized.report, parse_stage=parsed.stage)


def create_manual_quiz(db: Session, payload: ManualQuizCreate, user_id: UUID) -> GenerationOutcome:
    candidates = [question.model_dump() for question in payload.questions]
    sanitized = sanitize_candidates(candidates, candidates)

    assembled = assemble_quiz(
        db,
        title=payload.title,
        description=payload.description,
        created_by=user_id,
        duration=payload.duration,
        questions=sanitized.questions,
    )
    return GenerationOutcome(assembled=assembled, report=sanitized.report)


def rehost_quiz(
    db: Session,
    quiz_id: UUID,
    code_factory: Callable[[], str] = generate_join_code,
) -> QuizSession:
    quiz = quiz_crud.get_published_quiz(db, quiz_id)
    if not quiz:
        raise QuizNotFound("Quiz not found")

    try:
        session = create_session(db, quiz.id, quiz.duration, code_factory=code_factory)
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("could not create session", step="create_session") from exc
    logger.info("Quiz %s rehosted as session %s code %s", quiz.id, session.id, session.join_code)
    return session
