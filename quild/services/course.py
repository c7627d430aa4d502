from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quild.crud.course import course as crud_course
from quild.models.course import Course


class CourseService:
    def get_course(self, db: Session, course_id: int) -> Course:
        course = crud_course.get_with_modules(db, course_id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        return course


course_service = CourseService()
