"""
Test submission API endpoints
"""
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from assessment.api.deps import get_current_user_id, get_storage
from assessment.schemas.grading import GradingResponse, Submission
from assessment.services.grading_service import grading_service
from assessment.services.storage import StorageService

router = APIRouter(prefix="/api", tags=["results"])
logger = logging.getLogger(__name__)


@router.post("/test-results", response_model=GradingResponse, status_code=201)
async def submit_test(
    submission: Submission,
    user_id: Optional[str] = Depends(get_current_user_id),
    storage: StorageService = Depends(get_storage)
):
    """
    Submit and grade a completed test attempt

    Grading strategy:
    - Exact set match per question, no partial credit
    - Score against every question of the test, unanswered ones count as wrong
    - Answers for unknown questions are skipped and reported, not rejected

    Every call stores a new result; duplicate submissions are not merged.
    """
    logger.info(f"Grading submission for test {submission.test_id} from user {user_id}")

    graded = grading_service.grade(
        storage,
        user_id=user_id,
        test_id=submission.test_id,
        answers=submission.answers,
        time_spent=submission.time_spent,
    )

    return GradingResponse(**graded)
