from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quild.core.database import Base
from quild.core.constants import LessonTypeEnum, DEFAULT_LESSON_POINTS

class Lesson(Base):
    __tablename__ = "lessons"
    __table_args__ = (
        UniqueConstraint("week_id", "order", name="uq_lessons_week_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    week_id = Column(Integer, ForeignKey("weeks.id"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    lesson_type = Column(Enum(LessonTypeEnum, values_callable=lambda e: [m.value for m in e]), nullable=False)

    # Content
    duration = Column(Integer, nullable=True)  # Duration in minutes
    video_url = Column(String, nullable=True)
    reading_url = Column(String, nullable=True)
    instructions = Column(Text, nullable=True)
    resources = Column(JSON, nullable=False, default=list)  # [{title, url, type}]

    points = Column(Integer, nullable=False, default=DEFAULT_LESSON_POINTS)
    is_active = Column(Boolean, nullable=False, default=True)
    order = Column(Integer, nullable=False)
    prerequisites = Column(JSON, nullable=False, default=list)  # lesson ids
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    week = relationship("Week", back_populates="lessons")
