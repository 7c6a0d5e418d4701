import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.models.quiz_db.quiz_crud import find_expired_sessions, find_stale_drafts
from app.models.quiz_db.session_db import QuizSession


logger = logging.getLogger(__name__)


def purge_abandoned_drafts(db: Session, older_than: Optional[datetime] = None) -> int:
    """Delete quizzes whose creation never reached the published state."""
    cutoff = older_than or datetime.utcnow() - timedelta(minutes=settings.DRAFT_GRACE_MINUTES)
    drafts = find_stale_drafts(db, cutoff)

    for quiz in drafts:
        # a draft can only own the session of its own failed publish
        db.query(QuizSession).filter(QuizSession.quiz_id == quiz.id).delete(synchronize_session=False)
        db.delete(quiz)
    db.commit()

    if drafts:
        logger.info("Purged %d abandoned draft quizzes", len(drafts))
    return len(drafts)


def deactivate_expired_sessions(db: Session, now: Optional[datetime] = None) -> int:
    expired = find_expired_sessions(db, now or datetime.utcnow())
    for session in expired:
        session.is_active = False
    db.commit()

    if expired:
        logger.info("Deactivated %d expired sessions", len(expired))
    return len(expired)


def reconcile():
    db: Session = SessionLocal()
    try:
        purged = purge_abandoned_drafts(db)
        expired = deactivate_expired_sessions(db)
    finally:
        db.close()
    print(f"✅ Reconciled: {purged} drafts purged, {expired} sessions expired")


if __name__ == "__main__":
    configure_logging()
    reconcile()
