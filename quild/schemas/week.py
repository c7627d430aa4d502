from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

class WeekBase(BaseModel):
    week_number: int
    title: str
    description: Optional[str] = None
    is_active: bool = True
    estimated_duration: Optional[int] = None  # in days
    objectives: List[str] = Field(default_factory=list)

class WeekCreate(WeekBase):
    phase_id: int

class WeekUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    objectives: Optional[List[str]] = None

class Week(WeekBase):
    id: int
    phase_id: int

    model_config = ConfigDict(from_attributes=True)
