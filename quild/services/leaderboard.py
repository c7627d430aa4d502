from typing import List, Optional
from sqlalchemy.orm import Session

from quild.core.cache import cache
from quild.core.cache_config import CACHE_KEYS, CACHE_PATTERNS, CACHE_TTL
from quild.core.constants import ANONYMOUS_DISPLAY_NAME, EventTypeEnum
from quild.crud.progress import progress as crud_progress
from quild.models.user import User
from quild.schemas.leaderboard import LeaderboardEntry
from quild.utils.events import event_bus
import logging

logger = logging.getLogger(__name__)


class LeaderboardService:

    def _to_entry(self, rank: int, row: dict) -> dict:
        name = f"{row['first_name'] or ''} {row['last_name'] or ''}".strip()
        return {
            "rank": rank,
            "user_id": row["user_id"],
            "name": name or ANONYMOUS_DISPLAY_NAME,
            "avatar": row["photo"],
            "points": row["total_points"],
            "streak": row["current_streak"],
            "longest_streak": row["longest_streak"],
            "time_spent_hours": (row["total_time_spent"] + 30) // 60,
            "completed_lessons": row["completed_lessons"],
            "completed_weeks": row["completed_weeks"],
            "completed_phases": row["completed_phases"],
        }

    async def rank_users(self, db: Session, limit: Optional[int] = None) -> List[dict]:
        """Rank every ledger by points, then streak, then ledger age.

        Ranks are positional, so tied ledgers still get distinct ranks.
        """
        cache_key = CACHE_KEYS["leaderboard"].format(limit if limit is not None else "all")
        cached = await cache.get(cache_key)
        if cached is not None:
            return cached

        rows = crud_progress.get_leaderboard_rows(db, limit=limit)
        entries = [self._to_entry(rank, row) for rank, row in enumerate(rows, start=1)]
        await cache.set(cache_key, entries, ttl=CACHE_TTL["leaderboard"])
        return entries

    async def get_leaderboard(
        self, db: Session, current_user: User, limit: Optional[int] = None
    ) -> List[LeaderboardEntry]:
        entries = await self.rank_users(db, limit=limit)
        return [
            LeaderboardEntry(**entry, is_current_user=entry["user_id"] == current_user.id)
            for entry in entries
        ]


async def handle_leaderboard_invalidation(data: dict):
    deleted = await cache.delete_pattern(CACHE_PATTERNS["leaderboard"])
    if deleted:
        logger.debug(f"Invalidated {deleted} leaderboard cache entries for user {data.get('user_id')}")


leaderboard_service = LeaderboardService()

event_bus.subscribe(EventTypeEnum.LESSON_COMPLETED.value, handle_leaderboard_invalidation)
event_bus.subscribe(EventTypeEnum.USER_SYNCED.value, handle_leaderboard_invalidation)
event_bus.subscribe(EventTypeEnum.PROGRESS_CREATED.value, handle_leaderboard_invalidation)
