"""
Test model - authored collections of questions
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, func
from assessment.database import Base
from assessment.models.question import JSONType

CATEGORIES = ("react", "nextjs", "javascript", "typescript", "css-html", "general", "mixed")
DIFFICULTIES = ("easy", "medium", "hard", "mixed")


class Test(Base):
    """
    Tests table - question references are stored in authoring order and may be
    bare ids or embedded objects carrying an "id"
    """
    __tablename__ = "tests"
    __test__ = False  # not a pytest test class

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(20), nullable=False)
    difficulty = Column(String(20), nullable=False)
    time_limit = Column(Integer, default=0)  # minutes, 0 = no limit
    questions = Column(JSONType, nullable=False)
    passing_score = Column(Integer, default=70)
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "difficulty": self.difficulty,
            "time_limit": self.time_limit,
            "questions": self.questions or [],
            "passing_score": self.passing_score,
            "is_active": self.is_active,
        }

    def __repr__(self):
        return f"<Test(id={self.id}, title={self.title}, category={self.category})>"
