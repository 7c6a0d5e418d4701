import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Boolean, Index, Uuid, true
from app.core.database import Base


class QuizSession(Base):
    __tablename__ = "quiz_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    join_code = Column(String, nullable=False, index=True)

    __table_args__ = (
        # a join code may be reused only once the session holding it is inactive
        Index(
            "uq_quiz_sessions_active_join_code",
            "join_code",
            unique=True,
            postgresql_where=(is_active == true()),
            sqlite_where=(is_active == true()),
        ),
    )
