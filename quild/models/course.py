from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quild.core.database import Base
from quild.core.constants import ResourceTypeEnum

class Course(Base):
    """Legacy course: ordered modules of external resources with a per-resource checklist."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    modules = relationship("CourseModule", back_populates="course", order_by="CourseModule.order", cascade="all, delete-orphan")

class CourseModule(Base):
    __tablename__ = "course_modules"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    course = relationship("Course", back_populates="modules")
    resources = relationship("Resource", back_populates="module", order_by="Resource.order", cascade="all, delete-orphan")

class Resource(Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    module_id = Column(Integer, ForeignKey("course_modules.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    type = Column(Enum(ResourceTypeEnum, values_callable=lambda e: [m.value for m in e]), nullable=False)
    url = Column(String, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    module = relationship("CourseModule", back_populates="resources")
