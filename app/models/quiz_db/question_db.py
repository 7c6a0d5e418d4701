import uuid
from sqlalchemy import Column, String, ForeignKey, Integer, Text, JSON, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base


MULTIPLE_CHOICE = "multiple-choice"


class Question(Base):
    __tablename__ = "questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    question_type = Column(String, nullable=False, default=MULTIPLE_CHOICE)
    options = Column(JSON, nullable=False)  # ["...", "...", "...", "..."]
    correct_answer = Column(Text, nullable=False)
    points = Column(Integer, nullable=False)

    quiz = relationship("Quiz", back_populates="questions")
