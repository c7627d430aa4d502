from pydantic import BaseModel
from typing import Optional

class LeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    name: str
    avatar: Optional[str] = None
    points: int
    streak: int
    longest_streak: int
    time_spent_hours: int
    completed_lessons: int
    completed_weeks: int
    completed_phases: int
    is_current_user: bool = False
