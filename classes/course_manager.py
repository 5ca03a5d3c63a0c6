import logging

from sqlalchemy import func

from models import db
from models.courses import Course
from models.course_lessons import Lesson
from utils.errors import NotFoundError, ValidationError
from utils.helpers import CONTENT_STATUSES, sanitize_html, validate_choice, validate_id_list, validate_rating

logger = logging.getLogger(__name__)

COURSE_FIELDS = ("title", "description", "category", "cover_image", "status")
LESSON_FIELDS = ("title", "description", "content", "video_url", "status")


class CourseManager:
    """Courses and their ordered lessons."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # Courses

    def get_course(self, course_id):
        course = self.session.get(Course, course_id)
        if course is None:
            raise NotFoundError("Course not found")
        return course

    def all_courses(self):
        return self.session.query(Course).order_by(Course.created_at.desc(), Course.id.desc()).all()

    def courses_for_teacher(self, teacher_id):
        return (self.session.query(Course)
                .filter(Course.teacher_id == teacher_id)
                .order_by(Course.created_at.desc(), Course.id.desc())
                .all())

    def create_course(self, teacher_id, data):
        if not data.get("title"):
            raise ValidationError("Title is required")
        validate_choice(data.get("status"), CONTENT_STATUSES, "Status")

        course = Course(
            title=data["title"],
            description=sanitize_html(data.get("description")),
            category=data.get("category"),
            cover_image=data.get("cover_image"),
            status=data.get("status") or "draft",
            teacher_id=teacher_id,
        )
        self.session.add(course)
        self.session.commit()
        logger.info("Course %s created by user %s", course.id, teacher_id)
        return course

    def update_course(self, course_id, data):
        if "title" in data and not data.get("title"):
            raise ValidationError("Title is required")
        validate_choice(data.get("status"), CONTENT_STATUSES, "Status")

        course = self.get_course(course_id)
        for field in COURSE_FIELDS:
            if field in data and data[field] is not None:
                value = sanitize_html(data[field]) if field == "description" else data[field]
                setattr(course, field, value)
        self.session.commit()
        return course

    def delete_course(self, course_id):
        course = self.get_course(course_id)
        self.session.delete(course)
        self.session.commit()
        logger.info("Course %s deleted", course_id)

    # Lessons

    def lessons_for_course(self, course_id):
        self.get_course(course_id)
        return (self.session.query(Lesson)
                .filter(Lesson.course_id == course_id)
                .order_by(Lesson.position.asc(), Lesson.id.asc())
                .all())

    def get_lesson(self, course_id, lesson_id):
        lesson = self.session.get(Lesson, lesson_id)
        if lesson is None or lesson.course_id != course_id:
            raise NotFoundError("Lesson not found")
        return lesson

    def create_lesson(self, course_id, data):
        self.get_course(course_id)
        if not data.get("title"):
            raise ValidationError("Title is required")
        validate_choice(data.get("status"), CONTENT_STATUSES, "Status")

        lesson = Lesson(
            course_id=course_id,
            title=data["title"],
            description=data.get("description"),
            content=sanitize_html(data.get("content")),
            video_url=data.get("video_url"),
            status=data.get("status") or "draft",
            position=self._next_position(course_id),
        )
        self.session.add(lesson)
        self.session.commit()
        return lesson

    def update_lesson(self, course_id, lesson_id, data):
        if "title" in data and not data.get("title"):
            raise ValidationError("Title is required")
        validate_choice(data.get("status"), CONTENT_STATUSES, "Status")

        lesson = self.get_lesson(course_id, lesson_id)
        for field in LESSON_FIELDS:
            if field in data:
                value = sanitize_html(data[field]) if field == "content" else data[field]
                setattr(lesson, field, value)
        if not lesson.status:
            lesson.status = "draft"
        self.session.commit()
        return lesson

    def delete_lesson(self, course_id, lesson_id):
        lesson = self.get_lesson(course_id, lesson_id)
        self.session.delete(lesson)
        self.session.commit()

    def reorder_lessons(self, course_id, lesson_ids):
        """Assign positions 1..n in the given order."""
        self.get_course(course_id)
        lesson_ids = validate_id_list(lesson_ids, "lessonIds")

        lessons = {
            lesson.id: lesson
            for lesson in self.session.query(Lesson).filter(Lesson.course_id == course_id)
        }
        foreign = [lid for lid in lesson_ids if lid not in lessons]
        if foreign:
            raise ValidationError(f"Lessons do not belong to this course: {foreign}")

        for position, lesson_id in enumerate(lesson_ids, start=1):
            lessons[lesson_id].position = position
        self.session.commit()
        return self.lessons_for_course(course_id)

    def rate_lesson(self, course_id, lesson_id, rating):
        lesson = self.get_lesson(course_id, lesson_id)
        lesson.rating = validate_rating(rating)
        self.session.commit()
        return lesson

    def _next_position(self, course_id):
        last = self.session.query(func.max(Lesson.position)).filter(Lesson.course_id == course_id).scalar()
        return (last or 0) + 1
