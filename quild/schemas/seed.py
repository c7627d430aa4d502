from pydantic import BaseModel

class SeedResult(BaseModel):
    courses: int
    phases: int
    weeks: int
    lessons: int
