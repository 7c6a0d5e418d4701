import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base


QUIZ_STATUS_DRAFT = "draft"
QUIZ_STATUS_PUBLISHED = "published"


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        index=True
    )

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # minutes
    total_points = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default=QUIZ_STATUS_DRAFT, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # sessions point at the quiz, the quiz does not track them
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.position",
    )
