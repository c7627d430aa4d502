from datetime import datetime
from typing import Iterator, Optional, Set
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from quild.core.config import settings
from quild.core.constants import EventTypeEnum
from quild.crud.lesson import lesson as crud_lesson
from quild.crud.phase import phase as crud_phase
from quild.crud.progress import progress as crud_progress
from quild.crud.week import week as crud_week
from quild.models.lesson import Lesson
from quild.models.progress import CompletedLesson, CompletedPhase, CompletedWeek, UserProgress
from quild.schemas.lesson import LessonCompletionResult, LessonSummary
from quild.utils.dates import calendar_days_between, utcnow
from quild.utils.events import event_bus
import logging

logger = logging.getLogger(__name__)


class ProgressionService:
    """Applies the lesson-completion transition to a user's progress ledger.

    One completion records the lesson, updates points, time and streak,
    closes the week and phase when their active units are all done and moves
    the cursor to the next lesson the user has not completed yet.
    """

    def _next_streak(self, progress: UserProgress, now: datetime) -> int:
        if progress.last_activity_date is None:
            return 1
        days = calendar_days_between(progress.last_activity_date, now)
        if days <= 0:
            return progress.current_streak
        if days == 1:
            return progress.current_streak + 1
        return 1

    def _complete_week_if_done(
        self, db: Session, progress: UserProgress, lesson: Lesson, completed_ids: Set[int], now: datetime
    ) -> bool:
        week = lesson.week
        if week.id in progress.completed_week_ids():
            return False

        week_lessons = crud_lesson.get_active_by_week(db, week_id=week.id)
        if not all(week_lesson.id in completed_ids for week_lesson in week_lessons):
            return False

        progress.completed_weeks.append(
            CompletedWeek(
                week_id=week.id,
                completed_at=now,
                time_spent=sum(week_lesson.duration or 0 for week_lesson in week_lessons),
                points_earned=sum(week_lesson.points for week_lesson in week_lessons),
            )
        )
        logger.info(f"Ledger {progress.id} completed week {week.id}")
        return True

    def _complete_phase_if_done(self, db: Session, progress: UserProgress, lesson: Lesson, now: datetime) -> bool:
        phase_id = lesson.week.phase_id
        if phase_id in progress.completed_phase_ids():
            return False

        phase_week_ids = {phase_week.id for phase_week in crud_week.get_active_by_phase(db, phase_id=phase_id)}
        if not phase_week_ids.issubset(progress.completed_week_ids()):
            return False

        week_entries = [entry for entry in progress.completed_weeks if entry.week_id in phase_week_ids]
        progress.completed_phases.append(
            CompletedPhase(
                phase_id=phase_id,
                completed_at=now,
                time_spent=sum(entry.time_spent for entry in week_entries),
                points_earned=sum(entry.points_earned for entry in week_entries),
            )
        )
        logger.info(f"Ledger {progress.id} completed phase {phase_id}")
        return True

    def _iter_successors(self, db: Session, lesson: Lesson) -> Iterator[Lesson]:
        """Active lessons after ``lesson`` in curriculum order."""
        week = lesson.week
        phase = week.phase
        yield from crud_lesson.get_active_in_week_after(db, week_id=week.id, order=lesson.order)

        for later_week in crud_week.get_active_in_phase_after(db, phase_id=phase.id, week_number=week.week_number):
            yield from crud_lesson.get_active_by_week(db, week_id=later_week.id)

        for later_phase in crud_phase.get_active_after(db, order=phase.order):
            for phase_week in crud_week.get_active_by_phase(db, phase_id=later_phase.id):
                yield from crud_lesson.get_active_by_week(db, week_id=phase_week.id)

    def find_next_lesson(self, db: Session, lesson: Lesson, completed_ids: Set[int]) -> Optional[Lesson]:
        for candidate in self._iter_successors(db, lesson):
            if candidate.id not in completed_ids:
                return candidate
        return None

    def _apply(
        self, db: Session, progress: UserProgress, lesson: Lesson, time_spent: Optional[int], now: datetime
    ) -> LessonCompletionResult:
        completed_ids = progress.completed_lesson_ids()
        if lesson.id in completed_ids:
            return LessonCompletionResult(
                already_completed=True,
                new_total_points=progress.total_points,
                new_streak=progress.current_streak,
                new_total_time_spent=progress.total_time_spent,
            )

        spent = time_spent or lesson.duration or 0
        progress.completed_lessons.append(
            CompletedLesson(lesson_id=lesson.id, completed_at=now, time_spent=spent, points_earned=lesson.points)
        )
        completed_ids.add(lesson.id)
        progress.total_points += lesson.points
        progress.total_time_spent += spent

        progress.current_streak = self._next_streak(progress, now)
        progress.longest_streak = max(progress.longest_streak, progress.current_streak)
        progress.last_activity_date = now

        if self._complete_week_if_done(db, progress, lesson, completed_ids, now):
            self._complete_phase_if_done(db, progress, lesson, now)

        next_lesson = self.find_next_lesson(db, lesson, completed_ids)
        if next_lesson:
            progress.current_lesson_id = next_lesson.id
            progress.current_week_id = next_lesson.week_id
            progress.current_phase_id = next_lesson.week.phase_id

        return LessonCompletionResult(
            already_completed=False,
            points_earned=lesson.points,
            new_total_points=progress.total_points,
            new_streak=progress.current_streak,
            new_total_time_spent=progress.total_time_spent,
            next_lesson=LessonSummary.model_validate(next_lesson) if next_lesson else None,
        )

    async def complete_lesson(
        self,
        db: Session,
        progress: UserProgress,
        lesson_id: int,
        time_spent: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> LessonCompletionResult:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")

        now = now or utcnow()
        user_id = progress.user_id
        max_attempts = max(settings.PROGRESS_WRITE_MAX_ATTEMPTS, 1)

        for attempt in range(1, max_attempts + 1):
            try:
                # A single flush at commit keeps the ledger to one version bump per write.
                with db.no_autoflush:
                    result = self._apply(db, progress, lesson, time_spent, now)
                if result.already_completed:
                    return result
                db.commit()
            except (StaleDataError, IntegrityError) as e:
                db.rollback()
                logger.warning(
                    f"Write conflict completing lesson {lesson_id} for user {user_id} "
                    f"(attempt {attempt}/{max_attempts}): {type(e).__name__}"
                )
                progress = crud_progress.get_by_user(db, user_id=user_id)
                if progress is None:
                    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Progress not found")
                continue

            logger.info(f"User {user_id} completed lesson {lesson_id} (+{result.points_earned} points)")
            await event_bus.publish(
                EventTypeEnum.LESSON_COMPLETED.value,
                {"user_id": user_id, "lesson_id": lesson_id, "points_earned": result.points_earned},
            )
            return result

        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Progress was updated concurrently, please retry",
        )


progression_service = ProgressionService()
