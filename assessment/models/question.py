"""
Question model - authored multiple-choice questions
"""
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON
from assessment.database import Base

JSONType = JSON().with_variant(JSONB, "postgresql")


class Question(Base):
    """
    Questions table - read-only to grading and statistics

    options: [{"text": "...", "is_correct": bool,
               "feedback": [{"feedback_type": "correct"|"incorrect", "content": ...}]}]
    """
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question = Column(JSONType, nullable=False)  # Opaque rich content
    question_title = Column(String(255))
    category = Column(String(20))
    difficulty = Column(String(20))
    options = Column(JSONType, nullable=False)
    explanation = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "question": self.question,
            "question_title": self.question_title,
            "category": self.category,
            "difficulty": self.difficulty,
            "options": self.options or [],
            "explanation": self.explanation,
        }

    def __repr__(self):
        return f"<Question(id={self.id}, options={len(self.options or [])})>"
