"""
Test catalog API endpoints
"""
from fastapi import APIRouter, Depends, Query
import logging
import random

from assessment.api.deps import get_storage
from assessment.config import settings
from assessment.schemas.catalog import TestQuestionsResponse
from assessment.services.grading_service import grading_service
from assessment.services.storage import StorageService
from assessment.utils.identifiers import normalize_id
from assessment.utils.scoring import correct_option_indices

router = APIRouter(prefix="/api/tests", tags=["tests"])
logger = logging.getLogger(__name__)


@router.get("/{test_id}/questions", response_model=TestQuestionsResponse)
async def get_test_questions(
    test_id: str,
    shuffle: bool = Query(True, description="Shuffle question order"),
    storage: StorageService = Depends(get_storage)
):
    """
    Get a test and its questions for taking it

    Option correctness and feedback are never exposed here.
    """
    catalog = grading_service.load_catalog(storage, normalize_id(test_id, field="test id"))
    test = catalog["test"]

    questions = [
        {
            "id": question["id"],
            "question_title": question.get("question_title"),
            "question": question.get("question"),
            "options": [{"text": option.get("text", "")} for option in question.get("options") or []],
            "multiple_correct": len(correct_option_indices(question.get("options"))) > 1,
        }
        for question in catalog["questions"]
    ]

    if shuffle:
        random.shuffle(questions)

    return TestQuestionsResponse(
        test={
            "id": test["id"],
            "title": test["title"],
            "description": test.get("description"),
            "category": test["category"],
            "difficulty": test["difficulty"],
            "time_limit": test.get("time_limit") or 0,
            "passing_score": test["passing_score"] if test.get("passing_score") is not None else settings.DEFAULT_PASSING_SCORE,
            "is_active": bool(test.get("is_active", True)),
            "total_questions": len(questions),
        },
        questions=questions,
    )
