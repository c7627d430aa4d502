from sqlalchemy.orm import Session, selectinload
from typing import Any, List, Optional

from quild.crud.base import CRUDBase
from quild.models.lesson import Lesson
from quild.models.week import Week
from quild.schemas.lesson import LessonCreate, LessonUpdate

class CRUDLesson(CRUDBase[Lesson, LessonCreate, LessonUpdate]):

    def _query_active(self, db: Session):
        return db.query(Lesson).filter(Lesson.is_active == True)

    def get_with_week(self, db: Session, id: Any) -> Optional[Lesson]:
        return (
            db.query(Lesson)
            .options(selectinload(Lesson.week).selectinload(Week.phase))
            .filter(Lesson.id == id)
            .first()
        )

    def get_active(
        self, db: Session, *, week_id: Optional[int] = None, week_ids: Optional[List[int]] = None
    ) -> List[Lesson]:
        query = self._query_active(db)
        if week_id is not None:
            query = query.filter(Lesson.week_id == week_id)
        elif week_ids is not None:
            query = query.filter(Lesson.week_id.in_(week_ids))
        return query.order_by(Lesson.order, Lesson.id).all()

    def get_active_by_week(self, db: Session, *, week_id: int) -> List[Lesson]:
        return self.get_active(db, week_id=week_id)

    def get_first_active_in_week(self, db: Session, *, week_id: int) -> Optional[Lesson]:
        return (
            self._query_active(db)
            .filter(Lesson.week_id == week_id)
            .order_by(Lesson.order)
            .first()
        )

    def get_active_in_week_after(self, db: Session, *, week_id: int, order: int) -> List[Lesson]:
        return (
            self._query_active(db)
            .filter(Lesson.week_id == week_id, Lesson.order > order)
            .order_by(Lesson.order)
            .all()
        )

    def get_next_active_in_week(self, db: Session, *, week_id: int, order: int) -> Optional[Lesson]:
        return (
            self._query_active(db)
            .filter(Lesson.week_id == week_id, Lesson.order > order)
            .order_by(Lesson.order)
            .first()
        )

    def count_active(self, db: Session) -> int:
        return self._query_active(db).count()


lesson = CRUDLesson(Lesson)
