"""
TestResult model - stores graded submissions
"""
from datetime import timezone

from sqlalchemy import Column, Integer, Boolean, TIMESTAMP, ForeignKey, func
from assessment.database import Base
from assessment.models.question import JSONType


class TestResult(Base):
    """
    Test results table - one row per graded submission, never updated

    test_id is a plain reference so history survives a deleted test.
    """
    __tablename__ = "test_results"
    __test__ = False  # not a pytest test class

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    test_id = Column(Integer, nullable=False, index=True)
    answers = Column(JSONType)  # [{question, selected_options: [{option_index}], is_correct, time_spent}]
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False)
    time_spent = Column(Integer, default=0)  # seconds
    is_passed = Column(Boolean, default=False)
    completed_at = Column(TIMESTAMP, nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "user": self.user_id,
            "test": self.test_id,
            "answers": self.answers or [],
            "score": self.score,
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "time_spent": self.time_spent,
            "is_passed": self.is_passed,
            "completed_at": self._utc_isoformat(self.completed_at),
        }

    @staticmethod
    def _utc_isoformat(value):
        """Stored timestamps are naive UTC"""
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

    def __repr__(self):
        return f"<TestResult(user_id={self.user_id}, test_id={self.test_id}, score={self.score})>"
