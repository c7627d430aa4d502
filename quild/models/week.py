from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quild.core.database import Base

class Week(Base):
    __tablename__ = "weeks"
    __table_args__ = (
        UniqueConstraint("phase_id", "week_number", name="uq_weeks_phase_week_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    phase_id = Column(Integer, ForeignKey("phases.id"), nullable=False, index=True)
    week_number = Column(Integer, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    estimated_duration = Column(Integer, nullable=True)  # in days
    objectives = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    phase = relationship("Phase", back_populates="weeks")
    lessons = relationship("Lesson", back_populates="week", order_by="Lesson.order")
