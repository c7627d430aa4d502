from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from quild.crud.base import CRUDBase
from quild.models.course import Course, CourseModule, Resource
from quild.schemas.course import Course as CourseSchema


class CRUDCourse(CRUDBase[Course, CourseSchema, CourseSchema]):
    def get_with_modules(self, db: Session, *, course_id: int) -> Optional[Course]:
        return (
            db.query(Course)
            .options(selectinload(Course.modules).selectinload(CourseModule.resources))
            .filter(Course.id == course_id)
            .first()
        )

    def get_resource(self, db: Session, *, resource_id: int) -> Optional[Resource]:
        return db.query(Resource).filter(Resource.id == resource_id).first()

    def get_all(self, db: Session) -> List[Course]:
        return db.query(Course).order_by(Course.id).all()


course = CRUDCourse(Course)
