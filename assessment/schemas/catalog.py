"""
Pydantic schemas for reading a test's questions while taking it
"""
from typing import Any, List, Optional

from assessment.schemas.grading import CamelModel


class PublicOption(CamelModel):
    """Answer option without correctness or feedback"""
    text: str


class PublicQuestion(CamelModel):
    id: int
    question_title: Optional[str] = None
    question: Any = None
    options: List[PublicOption]
    multiple_correct: bool = False


class TestInfo(CamelModel):
    __test__ = False  # not a pytest test class

    id: int
    title: str
    description: Optional[str] = None
    category: str
    difficulty: str
    time_limit: int = 0
    passing_score: int
    is_active: bool
    total_questions: int


class TestQuestionsResponse(CamelModel):
    __test__ = False  # not a pytest test class

    test: TestInfo
    questions: List[PublicQuestion]
