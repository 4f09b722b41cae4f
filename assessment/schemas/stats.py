"""
Pydantic schemas for the user statistics dashboard
"""
from typing import Any, List, Optional

from assessment.schemas.grading import CamelModel, SelectedOption, SkipItem


class CategoryStat(CamelModel):
    """Average score for one test category"""
    category: str
    tests: int
    average_score: int


class FeedbackItem(CamelModel):
    option_index: int
    feedback_type: str
    content: Any


class QuestionSummary(CamelModel):
    id: str
    question_title: str
    question: Any = None


class AnswerDetail(CamelModel):
    """A stored answer enriched with feedback from its question"""
    question_id: Optional[int] = None
    question: Optional[QuestionSummary] = None
    is_correct: bool
    selected_options: List[SelectedOption]
    time_spent: int = 0
    feedback: Optional[List[FeedbackItem]] = None
    explanation: Optional[str] = None


class TestSummary(CamelModel):
    __test__ = False  # not a pytest test class

    id: str
    title: str
    category: str
    difficulty: str


class RecentResult(CamelModel):
    id: str
    test: TestSummary
    score: int
    correct_answers: int
    total_questions: int
    time_spent: int
    is_passed: bool
    completed_at: Optional[str] = None
    answers: List[AnswerDetail]


class UserStats(CamelModel):
    """Aggregate performance over a user's results"""
    total_tests: int
    passed_tests: int
    average_score: int
    total_time_spent: int
    category_stats: List[CategoryStat]
    recent_results: List[RecentResult]
    diagnostics: List[SkipItem] = []
