from sqlalchemy.orm import Session

from quild.core.constants import LessonTypeEnum, ResourceTypeEnum
from quild.crud.course import course as crud_course
from quild.crud.phase import phase as crud_phase
from quild.models.course import Course, CourseModule, Resource
from quild.models.lesson import Lesson
from quild.models.phase import Phase
from quild.models.progress import CompletedResource
from quild.models.week import Week
from quild.schemas.seed import SeedResult
from quild.services.seed_data import SAMPLE_COURSES, SAMPLE_CURRICULUM
import logging

logger = logging.getLogger(__name__)


class SeedService:

    def _replace_courses(self, db: Session) -> int:
        # Checklist entries point at resources that are about to disappear.
        db.query(CompletedResource).delete(synchronize_session=False)
        for existing in crud_course.get_all(db):
            db.delete(existing)
        db.flush()

        for course_data in SAMPLE_COURSES:
            modules = [
                CourseModule(
                    title=module_data["title"],
                    order=module_index,
                    resources=[
                        Resource(
                            title=resource_data["title"],
                            type=ResourceTypeEnum(resource_data["type"]),
                            url=resource_data["url"],
                            order=resource_index,
                        )
                        for resource_index, resource_data in enumerate(module_data["resources"])
                    ],
                )
                for module_index, module_data in enumerate(course_data["modules"])
            ]
            db.add(Course(title=course_data["title"], description=course_data["description"], modules=modules))
        return len(SAMPLE_COURSES)

    def _insert_curriculum(self, db: Session) -> SeedResult:
        phases = weeks = lessons = 0
        phase_ids_by_order = {}

        for phase_data in SAMPLE_CURRICULUM:
            phase = Phase(
                name=phase_data["name"],
                description=phase_data["description"],
                order=phase_data["order"],
                estimated_duration=phase_data["estimated_duration"],
                color=phase_data["color"],
                prerequisites=[phase_ids_by_order[order] for order in phase_data.get("prerequisites_by_order", [])],
            )
            db.add(phase)
            db.flush()
            phase_ids_by_order[phase.order] = phase.id
            phases += 1

            for week_data in phase_data["weeks"]:
                week = Week(
                    phase_id=phase.id,
                    week_number=week_data["week_number"],
                    title=week_data["title"],
                    estimated_duration=7,
                    objectives=week_data["objectives"],
                )
                db.add(week)
                db.flush()
                weeks += 1

                for order, lesson_data in enumerate(week_data["lessons"], start=1):
                    lesson_fields = dict(lesson_data)
                    lesson_fields["lesson_type"] = LessonTypeEnum(lesson_fields["lesson_type"])
                    db.add(Lesson(week_id=week.id, order=order, **lesson_fields))
                    lessons += 1

        return SeedResult(courses=0, phases=phases, weeks=weeks, lessons=lessons)

    def seed_database(self, db: Session) -> SeedResult:
        courses = self._replace_courses(db)

        if crud_phase.count(db) == 0:
            result = self._insert_curriculum(db)
        else:
            logger.info("Curriculum already present, skipping sample phases")
            result = SeedResult(courses=0, phases=0, weeks=0, lessons=0)
        result.courses = courses

        db.commit()
        logger.info(
            f"Seeded {result.courses} courses, {result.phases} phases, "
            f"{result.weeks} weeks and {result.lessons} lessons"
        )
        return result


seed_service = SeedService()
