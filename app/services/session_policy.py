import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import JoinCodeCapacityError
from app.models.quiz_db.quiz_crud import join_code_in_use
from app.models.quiz_db.session_db import QuizSession


logger = logging.getLogger(__name__)

# no 0/O or 1/I so codes survive being read aloud
JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_join_code(length: Optional[int] = None) -> str:
    length = length or settings.JOIN_CODE_LENGTH
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def session_window(duration_minutes: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    start = now or datetime.utcnow()
    return start, start + timedelta(minutes=duration_minutes)


def create_session(
    db: Session,
    quiz_id: UUID,
    duration_minutes: int,
    code_factory: Callable[[], str] = generate_join_code,
    now: Optional[datetime] = None,
    max_attempts: Optional[int] = None,
) -> QuizSession:
    """Open a new hosting session for a quiz with a fresh join code.

    Existing sessions of the quiz are left untouched. A code that is already
    held by an active session, either seen by the pre-check or rejected by the
    unique index on insert, is discarded and a new one drawn.
    """
    max_attempts = max_attempts or settings.JOIN_CODE_MAX_ATTEMPTS
    start, end = session_window(duration_minutes, now)

    for attempt in range(1, max_attempts + 1):
        code = code_factory()
        if join_code_in_use(db, code):
            logger.info("Join code collision on attempt %d/%d", attempt, max_attempts)
            continue

        session = QuizSession(
            quiz_id=quiz_id,
            start_time=start,
            end_time=end,
            is_active=True,
            join_code=code,
        )
        try:
            with db.begin_nested():
                db.add(session)
        except IntegrityError:
            logger.info("Join code taken concurrently on attempt %d/%d", attempt, max_attempts)
            continue

        db.commit()
        db.refresh(session)
        return session

    raise JoinCodeCapacityError(f"no free join code after {max_attempts} attempts")
