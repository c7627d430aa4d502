from sqlalchemy import Boolean, Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quild.core.database import Base
from quild.core.constants import DEFAULT_PHASE_COLOR

class Phase(Base):
    __tablename__ = "phases"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    order = Column(Integer, nullable=False, unique=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    estimated_duration = Column(Integer, nullable=True)  # in days
    prerequisites = Column(JSON, nullable=False, default=list)  # phase ids
    color = Column(String, nullable=False, default=DEFAULT_PHASE_COLOR)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    weeks = relationship("Week", back_populates="phase", order_by="Week.week_number")
