from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from quild.schemas.phase import Phase
from quild.schemas.week import Week
from quild.schemas.lesson import Lesson
from quild.schemas.leaderboard import LeaderboardEntry


class CompletedLessonEntry(BaseModel):
    lesson_id: int
    completed_at: datetime
    time_spent: int
    points_earned: int

    model_config = ConfigDict(from_attributes=True)


class CompletedWeekEntry(BaseModel):
    week_id: int
    completed_at: datetime
    time_spent: int
    points_earned: int

    model_config = ConfigDict(from_attributes=True)


class CompletedPhaseEntry(BaseModel):
    phase_id: int
    completed_at: datetime
    time_spent: int
    points_earned: int

    model_config = ConfigDict(from_attributes=True)


class AchievementEntry(BaseModel):
    type: str
    earned_at: datetime
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserProgress(BaseModel):
    id: int
    user_id: int
    current_phase: Optional[Phase] = None
    current_week: Optional[Week] = None
    current_lesson: Optional[Lesson] = None
    completed_phases: List[CompletedPhaseEntry] = []
    completed_weeks: List[CompletedWeekEntry] = []
    completed_lessons: List[CompletedLessonEntry] = []
    total_points: int
    current_streak: int
    longest_streak: int
    last_activity_date: Optional[datetime] = None
    total_time_spent: int
    achievements: List[AchievementEntry] = []
    completed_resources: List[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("completed_resource_ids", "completed_resources"),
    )
    version: int

    model_config = ConfigDict(from_attributes=True)


class ProgressStats(BaseModel):
    total_phases: int
    completed_phases: int
    total_weeks: int
    completed_weeks: int
    total_lessons: int
    completed_lessons: int
    completion_percentage: int
    total_points: int
    current_streak: int
    longest_streak: int
    total_time_spent: int


class Dashboard(BaseModel):
    progress: UserProgress
    leaderboard: List[LeaderboardEntry]


class CompletedResources(BaseModel):
    completed_resources: List[int]
