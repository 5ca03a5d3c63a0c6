import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from classes.attempt_roster import AttemptRoster
from models import db
from models.courses import Course
from models.enrolments import Enrolment
from models.exams import Exam
from models.exam_questions import ExamQuestion
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.helpers import validate_rating

logger = logging.getLogger(__name__)


def _is_better(exam, current):
    rating, current_rating = exam.rating or 0, current.rating or 0
    if rating != current_rating:
        return rating > current_rating
    return (exam.created_at, exam.id) > (current.created_at, current.id)


class EnrolmentManager:
    """Student side of courses: enrolment, published exams and exam ratings."""

    def __init__(self, session=None, roster=None):
        self.session = session if session is not None else db.session
        self.roster = roster or AttemptRoster(self.session)

    def enroll_student(self, course_id, student_id):
        if self.session.get(Course, course_id) is None:
            raise NotFoundError("Course not found")

        existing = (self.session.query(Enrolment)
                    .filter_by(course_id=course_id, student_id=student_id)
                    .first())
        if existing:
            raise ConflictError("Already enrolled in this course")

        enrolment = Enrolment(course_id=course_id, student_id=student_id)
        self.session.add(enrolment)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError("Already enrolled in this course")
        logger.info("Student %s enrolled in course %s", student_id, course_id)
        return enrolment

    def enrolled_courses(self, student_id):
        return (self.session.query(Course)
                .join(Enrolment, Enrolment.course_id == Course.id)
                .filter(Enrolment.student_id == student_id)
                .order_by(Enrolment.enrolled_at.desc(), Enrolment.id.desc())
                .all())

    def published_exams(self, course_id, student_id):
        """Highest rated published exam per category, newest wins a tie."""
        if self.session.get(Course, course_id) is None:
            raise NotFoundError("Course not found")

        exams = (self.session.query(Exam)
                 .filter(Exam.course_id == course_id, Exam.status == "published")
                 .all())
        if not exams:
            return []

        best = {}
        for exam in exams:
            current = best.get(exam.category)
            if current is None or _is_better(exam, current):
                best[exam.category] = exam

        exam_ids = [exam.id for exam in best.values()]
        counts = dict(
            self.session.query(ExamQuestion.exam_id, func.count(ExamQuestion.id))
            .filter(ExamQuestion.exam_id.in_(exam_ids))
            .group_by(ExamQuestion.exam_id)
            .all()
        )
        attempted = self.roster.attempted_exam_ids(student_id, exam_ids)

        return [
            {
                "id": exam.id,
                "title": exam.title,
                "category": exam.category,
                "complexity": exam.complexity,
                "estimated_time_to_complete": exam.estimated_time_to_complete,
                "rating": exam.rating,
                "total_questions": counts.get(exam.id, 0),
                "has_attempted": exam.id in attempted,
            }
            for exam in sorted(best.values(), key=lambda e: (-(e.rating or 0), e.id))
        ]

    def rate_exam(self, exam_id, rating):
        rating = validate_rating(rating)
        exam = self.session.get(Exam, exam_id)
        if exam is None:
            raise NotFoundError("Exam not found")
        if exam.status != "published":
            raise ValidationError("Only published exams can be rated")

        exam.rating = rating if exam.rating is None else (exam.rating + rating) / 2
        self.session.commit()
        return exam
