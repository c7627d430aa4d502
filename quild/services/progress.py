from typing import List
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quild.core.constants import DASHBOARD_LEADERBOARD_SIZE, EventTypeEnum
from quild.crud.course import course as crud_course
from quild.crud.lesson import lesson as crud_lesson
from quild.crud.phase import phase as crud_phase
from quild.crud.progress import progress as crud_progress
from quild.crud.week import week as crud_week
from quild.models.progress import CompletedResource, UserProgress
from quild.models.user import User
from quild.schemas.progress import Dashboard, ProgressStats, UserProgress as UserProgressSchema
from quild.services.leaderboard import leaderboard_service
from quild.utils.events import event_bus
import logging

logger = logging.getLogger(__name__)


class ProgressService:

    def _initial_cursor(self, db: Session) -> dict:
        cursor = {"current_phase_id": None, "current_week_id": None, "current_lesson_id": None}
        first_phase = crud_phase.get_first_active(db)
        if not first_phase:
            return cursor
        cursor["current_phase_id"] = first_phase.id

        first_week = crud_week.get_first_active_in_phase(db, phase_id=first_phase.id)
        if not first_week:
            return cursor
        cursor["current_week_id"] = first_week.id

        first_lesson = crud_lesson.get_first_active_in_week(db, week_id=first_week.id)
        if first_lesson:
            cursor["current_lesson_id"] = first_lesson.id
        return cursor

    async def ensure_progress(self, db: Session, user: User) -> UserProgress:
        existing = crud_progress.get_by_user(db, user_id=user.id)
        if existing:
            return existing

        ledger = UserProgress(
            user_id=user.id,
            total_points=0,
            current_streak=0,
            longest_streak=0,
            total_time_spent=0,
            **self._initial_cursor(db),
        )
        try:
            db.add(ledger)
            db.commit()
        except IntegrityError:
            db.rollback()
            existing = crud_progress.get_by_user(db, user_id=user.id)
            if existing is None:
                raise
            return existing

        logger.info(f"Created progress ledger for user {user.id}")
        await event_bus.publish(EventTypeEnum.PROGRESS_CREATED.value, {"user_id": user.id})
        return crud_progress.get_by_user(db, user_id=user.id)

    def get_stats(self, db: Session, progress: UserProgress) -> ProgressStats:
        total_lessons = crud_lesson.count_active(db)
        completed_lessons = len(progress.completed_lessons)
        percentage = round(completed_lessons / total_lessons * 100) if total_lessons else 0

        return ProgressStats(
            total_phases=crud_phase.count_active(db),
            completed_phases=len(progress.completed_phases),
            total_weeks=crud_week.count_active(db),
            completed_weeks=len(progress.completed_weeks),
            total_lessons=total_lessons,
            completed_lessons=completed_lessons,
            completion_percentage=min(percentage, 100),
            total_points=progress.total_points,
            current_streak=progress.current_streak,
            longest_streak=progress.longest_streak,
            total_time_spent=progress.total_time_spent,
        )

    async def get_dashboard(self, db: Session, progress: UserProgress, user: User) -> Dashboard:
        leaderboard = await leaderboard_service.get_leaderboard(
            db, current_user=user, limit=DASHBOARD_LEADERBOARD_SIZE
        )
        return Dashboard(progress=UserProgressSchema.model_validate(progress), leaderboard=leaderboard)

    def toggle_resource(self, db: Session, progress: UserProgress, resource_id: int) -> List[int]:
        """Flip one legacy checklist entry. Points, streak and cursor stay untouched."""
        if not crud_course.get_resource(db, resource_id=resource_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")

        entry = crud_progress.get_completed_resource(db, progress_id=progress.id, resource_id=resource_id)
        if entry:
            progress.completed_resources.remove(entry)
        else:
            progress.completed_resources.append(CompletedResource(resource_id=resource_id))

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Resource checklist was modified concurrently, please retry",
            )
        db.refresh(progress)
        return progress.completed_resource_ids


progress_service = ProgressService()
