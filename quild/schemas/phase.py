from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from quild.core.constants import DEFAULT_PHASE_COLOR

class PhaseBase(BaseModel):
    name: str
    description: Optional[str] = None
    order: int
    is_active: bool = True
    estimated_duration: Optional[int] = None  # in days
    prerequisites: List[int] = Field(default_factory=list)
    color: str = DEFAULT_PHASE_COLOR

class PhaseCreate(PhaseBase):
    pass

class PhaseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    estimated_duration: Optional[int] = None
    color: Optional[str] = None

class Phase(PhaseBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
