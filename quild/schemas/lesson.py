from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from quild.core.constants import LessonTypeEnum, ResourceTypeEnum, DEFAULT_LESSON_POINTS
from quild.schemas.phase import Phase
from quild.schemas.week import Week

class LessonResource(BaseModel):
    title: str
    url: str
    type: ResourceTypeEnum

    model_config = ConfigDict(use_enum_values=True)

class LessonBase(BaseModel):
    day_number: int
    title: str
    description: Optional[str] = None
    lesson_type: LessonTypeEnum
    duration: Optional[int] = None  # Duration in minutes
    video_url: Optional[str] = None
    reading_url: Optional[str] = None
    instructions: Optional[str] = None
    resources: List[LessonResource] = Field(default_factory=list)
    points: int = Field(default=DEFAULT_LESSON_POINTS, ge=0)
    is_active: bool = True
    order: int
    prerequisites: List[int] = Field(default_factory=list)

    model_config = ConfigDict(use_enum_values=True)

class LessonCreate(LessonBase):
    week_id: int

class LessonUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    points: Optional[int] = None
    is_active: Optional[bool] = None

class Lesson(LessonBase):
    id: int
    week_id: int

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class LessonSummary(BaseModel):
    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)

class LessonDetail(BaseModel):
    lesson: Lesson
    week: Week
    phase: Phase
    is_completed: bool
    next_lesson: Optional[LessonSummary] = None

class LessonCompleteRequest(BaseModel):
    time_spent: Optional[int] = Field(default=None, alias="timeSpent", ge=0)  # minutes

    model_config = ConfigDict(populate_by_name=True)

class LessonCompletionResult(BaseModel):
    already_completed: bool = False
    points_earned: int = 0
    new_total_points: Optional[int] = None
    new_streak: Optional[int] = None
    new_total_time_spent: Optional[int] = None
    next_lesson: Optional[LessonSummary] = None
