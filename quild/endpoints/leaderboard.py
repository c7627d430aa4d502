from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from quild.core.constants import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_MAX_LIMIT
from quild.models.user import User
from quild.schemas.leaderboard import LeaderboardEntry
from quild.schemas.response import APIResponse
from quild.services.leaderboard import leaderboard_service
from quild.utils import deps

router = APIRouter()


@router.get("", response_model=APIResponse[List[LeaderboardEntry]])
async def get_leaderboard(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user),
    limit: int = Query(LEADERBOARD_DEFAULT_LIMIT, ge=1, le=LEADERBOARD_MAX_LIMIT),
):
    entries = await leaderboard_service.get_leaderboard(db, current_user=user, limit=limit)
    return APIResponse(message="Leaderboard retrieved successfully", data=entries)
