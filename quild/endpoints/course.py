from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quild.models.user import User
from quild.schemas.course import Course
from quild.schemas.response import APIResponse
from quild.services.course import course_service
from quild.utils import deps

router = APIRouter()


@router.get("/{course_id}", response_model=APIResponse[Course])
def get_course(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    user: User = Depends(deps.get_current_user),
):
    course = course_service.get_course(db, course_id=course_id)
    return APIResponse(message="Course retrieved successfully", data=Course.model_validate(course))
