import logging

from sqlalchemy import func

from models import db
from models.courses import Course
from models.exams import Exam
from models.exam_questions import ExamQuestion
from models.questions import Question
from utils.errors import NotFoundError, ValidationError
from utils.helpers import (
    EXAM_COMPLEXITIES, EXAM_STATUSES, is_number, validate_choice, validate_id_list,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "category", "status", "complexity", "estimated_time_to_complete")
REQUIRED_FIELDS = ("title", "status")


def _validate_exam_fields(data):
    validate_choice(data.get("status"), EXAM_STATUSES, "Status")
    validate_choice(data.get("complexity"), EXAM_COMPLEXITIES, "Complexity")
    estimated = data.get("estimated_time_to_complete")
    if estimated is not None and (not is_number(estimated) or estimated <= 0):
        raise ValidationError("Estimated time to complete must be a positive number (in minutes)")


class ExamManager:
    """Exam metadata and the ordered question bindings of each exam."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def get_exam(self, exam_id):
        exam = self.session.get(Exam, exam_id)
        if exam is None:
            raise NotFoundError("Exam not found")
        return exam

    def create_exam(self, course_id, teacher_id, data):
        if not data.get("title"):
            raise ValidationError("Title is required")
        _validate_exam_fields(data)

        course = self.session.get(Course, course_id)
        if course is None:
            raise NotFoundError("Course not found")

        question_ids = data.get("questionIds")
        if question_ids:
            self._check_questions_exist(validate_id_list(question_ids), course_id)

        exam = Exam(
            course_id=course_id,
            user_id=teacher_id,
            title=data["title"],
            description=data.get("description"),
            category=data.get("category"),
            status=data.get("status") or "draft",
            complexity=data.get("complexity"),
            estimated_time_to_complete=data.get("estimated_time_to_complete"),
        )
        self.session.add(exam)
        self.session.flush()

        if question_ids:
            self._bind(exam, validate_id_list(question_ids), start=1)

        self.session.commit()
        logger.info("Exam %s created in course %s by user %s", exam.id, course_id, teacher_id)
        return exam

    def exams_for_course(self, course_id):
        return (self.session.query(Exam)
                .filter(Exam.course_id == course_id)
                .order_by(Exam.created_at.desc(), Exam.id.desc())
                .all())

    def exams_for_teacher(self, teacher_id):
        exams = (self.session.query(Exam)
                 .filter(Exam.user_id == teacher_id)
                 .order_by(Exam.created_at.desc(), Exam.id.desc())
                 .all())
        return [
            {**exam.to_dict(), "course_name": exam.course.title if exam.course else "Unknown Course"}
            for exam in exams
        ]

    def update_exam(self, exam_id, data):
        exam = self.get_exam(exam_id)
        if "title" in data and not data.get("title"):
            raise ValidationError("Title is required")
        _validate_exam_fields(data)

        for field in EDITABLE_FIELDS:
            if field in data and not (field in REQUIRED_FIELDS and data[field] is None):
                setattr(exam, field, data[field])

        question_ids = data.get("questionIds")
        if question_ids is not None:
            if not isinstance(question_ids, list):
                raise ValidationError("questionIds must be an array")
            if question_ids:
                self._check_questions_exist(validate_id_list(question_ids), exam.course_id)
            exam.exam_questions.clear()
            self.session.flush()
            if question_ids:
                self._bind(exam, validate_id_list(question_ids), start=1)

        self.session.commit()
        return exam

    def delete_exam(self, exam_id):
        exam = self.get_exam(exam_id)
        self.session.delete(exam)
        self.session.commit()
        logger.info("Exam %s deleted", exam_id)

    def questions_for(self, exam_id):
        """Authoritative question list of an exam, ordered by position."""
        rows = (self.session.query(ExamQuestion, Question)
                .join(Question, ExamQuestion.question_id == Question.id)
                .filter(ExamQuestion.exam_id == exam_id)
                .order_by(ExamQuestion.position.asc())
                .all())
        return [
            {
                "id": question.id,
                "text": question.question_text,
                "options": question.options,
                "correct": question.correct,
                "hint": question.hint,
                "video": question.video,
                "image": question.image,
                "category": question.category,
                "weight": question.weight if question.weight is not None else 1.0,
                "position": binding.position,
            }
            for binding, question in rows
        ]

    def add_questions(self, exam_id, question_ids):
        """Append questions after the current last position."""
        exam = self.get_exam(exam_id)
        question_ids = validate_id_list(question_ids)

        already = {b.question_id for b in exam.exam_questions}
        duplicates = [qid for qid in question_ids if qid in already]
        if duplicates:
            raise ValidationError(f"Questions already in exam: {duplicates}")

        self._check_questions_exist(question_ids, exam.course_id)
        self._bind(exam, question_ids, start=self._next_position(exam.id))
        self.session.commit()
        return {"success": True, "message": "Questions added to exam successfully"}

    def remove_questions(self, exam_id, question_ids):
        """Unbind questions. Remaining positions are left as they are."""
        self.get_exam(exam_id)
        question_ids = validate_id_list(question_ids)
        removed = (self.session.query(ExamQuestion)
                   .filter(ExamQuestion.exam_id == exam_id,
                           ExamQuestion.question_id.in_(question_ids))
                   .delete(synchronize_session="fetch"))
        self.session.commit()
        logger.info("Removed %s question binding(s) from exam %s", removed, exam_id)
        return {"success": True, "message": "Questions removed from exam successfully"}

    def _next_position(self, exam_id):
        last = self.session.query(func.max(ExamQuestion.position)).filter(ExamQuestion.exam_id == exam_id).scalar()
        return (last or 0) + 1

    def _check_questions_exist(self, question_ids, course_id):
        """Only questions of the exam's own course can be bound."""
        found = {row.id for row in self.session.query(Question.id)
                 .filter(Question.id.in_(question_ids), Question.course_id == course_id)}
        missing = [qid for qid in question_ids if qid not in found]
        if missing:
            raise NotFoundError(f"Questions not found in this course: {missing}")

    def _bind(self, exam, question_ids, start):
        for offset, question_id in enumerate(question_ids):
            self.session.add(ExamQuestion(
                exam_id=exam.id,
                course_id=exam.course_id,
                question_id=question_id,
                position=start + offset,
            ))
        self.session.flush()
