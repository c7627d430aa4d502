from typing import List, Optional
from pydantic import BaseModel
from sqlalchemy import func, desc
from sqlalchemy.orm import Session, selectinload

from quild.crud.base import CRUDBase
from quild.models.progress import (
    UserProgress,
    CompletedLesson,
    CompletedWeek,
    CompletedPhase,
    CompletedResource,
)
from quild.models.user import User


class CRUDUserProgress(CRUDBase[UserProgress, BaseModel, BaseModel]):
    def get_by_user(self, db: Session, *, user_id: int) -> Optional[UserProgress]:
        return (
            db.query(UserProgress)
            .options(
                selectinload(UserProgress.completed_lessons),
                selectinload(UserProgress.completed_weeks),
                selectinload(UserProgress.completed_phases),
                selectinload(UserProgress.completed_resources),
            )
            .filter(UserProgress.user_id == user_id)
            .first()
        )

    def get_completed_resource(
        self, db: Session, *, progress_id: int, resource_id: int
    ) -> Optional[CompletedResource]:
        return (
            db.query(CompletedResource)
            .filter(
                CompletedResource.progress_id == progress_id,
                CompletedResource.resource_id == resource_id,
            )
            .first()
        )

    def get_leaderboard_rows(self, db: Session, *, limit: Optional[int] = None) -> List[dict]:
        lessons_sq = (
            db.query(CompletedLesson.progress_id, func.count(CompletedLesson.id).label("lessons_count"))
            .group_by(CompletedLesson.progress_id)
            .subquery()
        )
        weeks_sq = (
            db.query(CompletedWeek.progress_id, func.count(CompletedWeek.id).label("weeks_count"))
            .group_by(CompletedWeek.progress_id)
            .subquery()
        )
        phases_sq = (
            db.query(CompletedPhase.progress_id, func.count(CompletedPhase.id).label("phases_count"))
            .group_by(CompletedPhase.progress_id)
            .subquery()
        )

        query = (
            db.query(
                UserProgress.id.label("progress_id"),
                User.id.label("user_id"),
                User.first_name,
                User.last_name,
                User.photo,
                UserProgress.total_points,
                UserProgress.current_streak,
                UserProgress.longest_streak,
                UserProgress.total_time_spent,
                func.coalesce(lessons_sq.c.lessons_count, 0).label("completed_lessons"),
                func.coalesce(weeks_sq.c.weeks_count, 0).label("completed_weeks"),
                func.coalesce(phases_sq.c.phases_count, 0).label("completed_phases"),
            )
            .join(User, User.id == UserProgress.user_id)
            .outerjoin(lessons_sq, lessons_sq.c.progress_id == UserProgress.id)
            .outerjoin(weeks_sq, weeks_sq.c.progress_id == UserProgress.id)
            .outerjoin(phases_sq, phases_sq.c.progress_id == UserProgress.id)
            .order_by(desc(UserProgress.total_points), desc(UserProgress.current_streak), UserProgress.id)
        )
        if limit is not None:
            query = query.limit(limit)

        return [
            {
                "progress_id": row.progress_id,
                "user_id": row.user_id,
                "first_name": row.first_name,
                "last_name": row.last_name,
                "photo": row.photo,
                "total_points": row.total_points,
                "current_streak": row.current_streak,
                "longest_streak": row.longest_streak,
                "total_time_spent": row.total_time_spent,
                "completed_lessons": row.completed_lessons,
                "completed_weeks": row.completed_weeks,
                "completed_phases": row.completed_phases,
            }
            for row in query.all()
        ]


progress = CRUDUserProgress(UserProgress)
