"""
Pydantic schemas for test submission and grading
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional, Tuple, Union


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AnswerSubmission(CamelModel):
    """One answered question within an attempt"""
    question_id: Union[int, str]
    selected_options: Tuple[int, ...] = ()
    time_spent: int = Field(0, ge=0, description="Seconds spent on the question")

    class Config:
        frozen = True


class Submission(CamelModel):
    """A completed attempt, handed over in one piece at submission time"""
    test_id: Optional[Union[int, str]] = None
    answers: Optional[Tuple[AnswerSubmission, ...]] = None
    time_spent: Optional[int] = Field(None, ge=0, description="Total seconds spent")

    class Config:
        frozen = True


class SelectedOption(CamelModel):
    option_index: int


class GradedAnswer(CamelModel):
    """Grading details for a single answer as stored on the result"""
    question: int
    selected_options: List[SelectedOption]
    is_correct: bool
    time_spent: int = 0


class SkipItem(CamelModel):
    """An item excluded from grading or degraded during aggregation"""
    reason: str
    question_id: Optional[Any] = None
    result_id: Optional[int] = None
    test_id: Optional[Any] = None
    detail: Optional[str] = None


class ResultRecord(CamelModel):
    """Persisted test result"""
    id: int
    user: int
    test: int
    answers: List[GradedAnswer]
    score: int
    total_questions: int
    correct_answers: int
    time_spent: int = 0
    is_passed: bool
    completed_at: Optional[str] = None


class GradingResponse(CamelModel):
    """Response after a submission is graded"""
    result: ResultRecord
    score: int
    correct_answers: int
    total_questions: int
    is_passed: bool
    skipped: List[SkipItem] = []
