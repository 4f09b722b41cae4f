"""
User statistics API endpoints
"""
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from assessment.api.deps import get_current_user_id, get_storage
from assessment.schemas.stats import UserStats
from assessment.services.stats_service import stats_service
from assessment.services.storage import StorageService

router = APIRouter(prefix="/api", tags=["stats"])
logger = logging.getLogger(__name__)


@router.get("/user/stats", response_model=UserStats)
async def get_user_stats(
    user_id: Optional[str] = Depends(get_current_user_id),
    storage: StorageService = Depends(get_storage)
):
    """
    Get dashboard statistics for the current user

    Returns:
    - Totals (tests taken, passed, average score, time spent)
    - Per-category average scores
    - Up to 10 recent results with per-answer feedback
    - Diagnostics for references that could not be resolved
    """
    logger.info(f"Fetching stats for user {user_id}")

    stats = stats_service.compute_stats(storage, user_id)

    return UserStats(**stats)
