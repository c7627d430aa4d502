from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quild.crud.lesson import lesson as crud_lesson
from quild.crud.phase import phase as crud_phase
from quild.crud.week import week as crud_week
from quild.models.lesson import Lesson
from quild.models.phase import Phase
from quild.models.progress import UserProgress
from quild.models.week import Week
from quild.schemas.lesson import Lesson as LessonSchema, LessonDetail, LessonSummary
from quild.schemas.phase import Phase as PhaseSchema
from quild.schemas.week import Week as WeekSchema


class CatalogService:

    def get_phases(self, db: Session) -> List[Phase]:
        return crud_phase.get_active(db)

    def get_weeks(self, db: Session, phase_id: Optional[int] = None) -> List[Week]:
        return crud_week.get_active(db, phase_id=phase_id)

    def get_lessons(
        self, db: Session, week_id: Optional[int] = None, phase_id: Optional[int] = None
    ) -> List[Lesson]:
        if week_id is not None:
            return crud_lesson.get_active(db, week_id=week_id)
        if phase_id is not None:
            week_ids = [week.id for week in crud_week.get_active_by_phase(db, phase_id=phase_id)]
            if not week_ids:
                return []
            return crud_lesson.get_active(db, week_ids=week_ids)
        return crud_lesson.get_active(db)

    def get_lesson_detail(self, db: Session, lesson_id: int, progress: UserProgress) -> LessonDetail:
        lesson = crud_lesson.get_with_week(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")

        next_lesson = crud_lesson.get_next_active_in_week(db, week_id=lesson.week_id, order=lesson.order)
        return LessonDetail(
            lesson=LessonSchema.model_validate(lesson),
            week=WeekSchema.model_validate(lesson.week),
            phase=PhaseSchema.model_validate(lesson.week.phase),
            is_completed=lesson.id in progress.completed_lesson_ids(),
            next_lesson=LessonSummary.model_validate(next_lesson) if next_lesson else None,
        )


catalog_service = CatalogService()
