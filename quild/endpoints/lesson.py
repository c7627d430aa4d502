from typing import Optional
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from quild.models.progress import UserProgress
from quild.schemas.lesson import LessonCompleteRequest, LessonCompletionResult
from quild.schemas.response import APIResponse
from quild.services.progression import progression_service
from quild.utils import deps

router = APIRouter()


@router.post("/{lesson_id}/complete", response_model=APIResponse[LessonCompletionResult])
async def complete_lesson(
    *,
    db: Session = Depends(deps.get_db),
    lesson_id: int,
    completion_in: Optional[LessonCompleteRequest] = Body(None),
    progress: UserProgress = Depends(deps.get_current_progress),
):
    time_spent = completion_in.time_spent if completion_in else None
    result = await progression_service.complete_lesson(
        db, progress=progress, lesson_id=lesson_id, time_spent=time_spent
    )
    message = "Lesson already completed" if result.already_completed else "Lesson completed successfully!"
    return APIResponse(message=message, data=result)
