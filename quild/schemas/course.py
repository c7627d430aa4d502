from pydantic import BaseModel, ConfigDict
from typing import Optional, List

from quild.core.constants import ResourceTypeEnum

class Resource(BaseModel):
    id: int
    title: str
    type: ResourceTypeEnum
    url: str

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CourseModule(BaseModel):
    id: int
    title: str
    resources: List[Resource] = []

    model_config = ConfigDict(from_attributes=True)

class Course(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    modules: List[CourseModule] = []

    model_config = ConfigDict(from_attributes=True)
