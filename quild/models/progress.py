from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quild.core.database import Base


class CompletedLesson(Base):
    __tablename__ = "completed_lessons"
    __table_args__ = (
        UniqueConstraint("progress_id", "lesson_id", name="uq_completed_lessons_progress_lesson"),
    )

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(Integer, ForeignKey("user_progress.id"), nullable=False, index=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id"), nullable=False)
    completed_at = Column(DateTime, nullable=False)
    time_spent = Column(Integer, nullable=False, default=0)  # in minutes
    points_earned = Column(Integer, nullable=False, default=0)

    lesson = relationship("Lesson")


class CompletedWeek(Base):
    __tablename__ = "completed_weeks"
    __table_args__ = (
        UniqueConstraint("progress_id", "week_id", name="uq_completed_weeks_progress_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(Integer, ForeignKey("user_progress.id"), nullable=False, index=True)
    week_id = Column(Integer, ForeignKey("weeks.id"), nullable=False)
    completed_at = Column(DateTime, nullable=False)
    time_spent = Column(Integer, nullable=False, default=0)
    points_earned = Column(Integer, nullable=False, default=0)


class CompletedPhase(Base):
    __tablename__ = "completed_phases"
    __table_args__ = (
        UniqueConstraint("progress_id", "phase_id", name="uq_completed_phases_progress_phase"),
    )

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(Integer, ForeignKey("user_progress.id"), nullable=False, index=True)
    phase_id = Column(Integer, ForeignKey("phases.id"), nullable=False)
    completed_at = Column(DateTime, nullable=False)
    time_spent = Column(Integer, nullable=False, default=0)
    points_earned = Column(Integer, nullable=False, default=0)


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(Integer, ForeignKey("user_progress.id"), nullable=False, index=True)
    type = Column(String, nullable=False)
    earned_at = Column(DateTime, nullable=False, server_default=func.now())
    description = Column(String, nullable=True)


class CompletedResource(Base):
    """Legacy per-resource checklist entry, independent of points and cascade."""
    __tablename__ = "completed_resources"
    __table_args__ = (
        UniqueConstraint("progress_id", "resource_id", name="uq_completed_resources_progress_resource"),
    )

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(Integer, ForeignKey("user_progress.id"), nullable=False, index=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class UserProgress(Base):
    __tablename__ = "user_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    # Cursor: the next incomplete unit
    current_phase_id = Column(Integer, ForeignKey("phases.id"), nullable=True, index=True)
    current_week_id = Column(Integer, ForeignKey("weeks.id"), nullable=True, index=True)
    current_lesson_id = Column(Integer, ForeignKey("lessons.id"), nullable=True, index=True)

    # Gamification
    total_points = Column(Integer, nullable=False, default=0, index=True)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_activity_date = Column(DateTime, nullable=True)
    total_time_spent = Column(Integer, nullable=False, default=0)  # in minutes

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    user = relationship("User", back_populates="progress")
    current_phase = relationship("Phase", foreign_keys=[current_phase_id])
    current_week = relationship("Week", foreign_keys=[current_week_id])
    current_lesson = relationship("Lesson", foreign_keys=[current_lesson_id])

    completed_lessons = relationship(
        CompletedLesson, order_by=[CompletedLesson.completed_at, CompletedLesson.id], cascade="all, delete-orphan"
    )
    completed_weeks = relationship(
        CompletedWeek, order_by=[CompletedWeek.completed_at, CompletedWeek.id], cascade="all, delete-orphan"
    )
    completed_phases = relationship(
        CompletedPhase, order_by=[CompletedPhase.completed_at, CompletedPhase.id], cascade="all, delete-orphan"
    )
    achievements = relationship(
        Achievement, order_by=[Achievement.earned_at, Achievement.id], cascade="all, delete-orphan"
    )
    completed_resources = relationship(
        CompletedResource, order_by=CompletedResource.id, cascade="all, delete-orphan"
    )

    def completed_lesson_ids(self) -> set:
        return {entry.lesson_id for entry in self.completed_lessons}

    def completed_week_ids(self) -> set:
        return {entry.week_id for entry in self.completed_weeks}

    def completed_phase_ids(self) -> set:
        return {entry.phase_id for entry in self.completed_phases}

    @property
    def completed_resource_ids(self) -> list:
        return [entry.resource_id for entry in self.completed_resources]
