from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from quild.models.progress import UserProgress
from quild.models.user import User
from quild.schemas.lesson import Lesson, LessonDetail
from quild.schemas.phase import Phase
from quild.schemas.response import APIResponse
from quild.schemas.week import Week
from quild.services.catalog import catalog_service
from quild.utils import deps

router = APIRouter()


@router.get("/phases", response_model=APIResponse[List[Phase]])
def get_phases(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user),
):
    phases = catalog_service.get_phases(db)
    return APIResponse(message="Phases retrieved successfully", data=[Phase.model_validate(p) for p in phases])


@router.get("/weeks", response_model=APIResponse[List[Week]])
def get_weeks(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user),
    phase_id: Optional[int] = Query(None, alias="phaseId"),
):
    weeks = catalog_service.get_weeks(db, phase_id=phase_id)
    return APIResponse(message="Weeks retrieved successfully", data=[Week.model_validate(w) for w in weeks])


@router.get("/lessons", response_model=APIResponse[List[Lesson]])
def get_lessons(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user),
    week_id: Optional[int] = Query(None, alias="weekId"),
    phase_id: Optional[int] = Query(None, alias="phaseId"),
):
    lessons = catalog_service.get_lessons(db, week_id=week_id, phase_id=phase_id)
    return APIResponse(message="Lessons retrieved successfully", data=[Lesson.model_validate(l) for l in lessons])


@router.get("/lessons/{lesson_id}", response_model=APIResponse[LessonDetail])
def get_lesson(
    *,
    db: Session = Depends(deps.get_db),
    lesson_id: int,
    progress: UserProgress = Depends(deps.get_current_progress),
):
    detail = catalog_service.get_lesson_detail(db, lesson_id=lesson_id, progress=progress)
    return APIResponse(message="Lesson retrieved successfully", data=detail)
