import logging

from sqlalchemy import func

from models import db
from models.courses import Course
from models.questions import Question
from utils.errors import NotFoundError, ValidationError
from utils.helpers import validate_question, validate_rating, validate_weight

logger = logging.getLogger(__name__)


class QuestionManager:
    """Question bank CRUD. Questions belong to a course and their author."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def _course(self, course_id):
        course = self.session.get(Course, course_id)
        if course is None:
            raise NotFoundError("Course not found")
        return course

    def _build(self, course_id, user_id, category, payload):
        validate_question(payload)
        return Question(
            course_id=course_id,
            user_id=user_id,
            category=category,
            question_text=payload.get("text") or payload.get("question"),
            options=payload["options"],
            correct=payload["correct"],
            hint=payload.get("hint"),
            video=payload.get("video"),
            image=payload.get("image"),
            weight=validate_weight(payload.get("weight")),
        )

    def create_question(self, course_id, user_id, data):
        self._course(course_id)
        if not data.get("category"):
            raise ValidationError("Category, question, options, and correct answer are required")

        question = self._build(course_id, user_id, data["category"], data)
        self.session.add(question)
        self.session.commit()
        return question

    def create_many(self, course_id, user_id, data):
        self._course(course_id)
        category = data.get("category")
        questions = data.get("questions")
        if not category:
            raise ValidationError("Category is required")
        if not isinstance(questions, list) or not questions:
            raise ValidationError("Questions array is required and must not be empty")

        created = [self._build(course_id, user_id, category, payload) for payload in questions]
        self.session.add_all(created)
        self.session.commit()
        logger.info("Created %s questions in course %s", len(created), course_id)
        return created

    def get_question(self, question_id):
        question = self.session.get(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")
        return question

    def questions_for_course(self, course_id, category=None, user_id=None):
        self._course(course_id)
        query = self.session.query(Question).filter(Question.course_id == course_id)
        if category:
            query = query.filter(Question.category == category)
        if user_id is not None:
            query = query.filter(Question.user_id == user_id)
        return query.order_by(Question.created_at.desc(), Question.id.desc()).all()

    def questions_for_teacher(self, teacher_id):
        return (self.session.query(Question)
                .filter(Question.user_id == teacher_id)
                .order_by(Question.created_at.desc(), Question.id.desc())
                .all())

    def count_for_teacher(self, teacher_id):
        return self.session.query(func.count(Question.id)).filter(Question.user_id == teacher_id).scalar() or 0

    def questions_by_category(self, category, user_id=None):
        if not category:
            raise ValidationError("Category is required")
        query = self.session.query(Question).filter(Question.category == category)
        if user_id is not None:
            query = query.filter(Question.user_id == user_id)
        return query.order_by(Question.created_at.desc(), Question.id.desc()).all()

    def update_question(self, question_id, data):
        question = self.get_question(question_id)

        merged = {
            "text": data.get("question", data.get("text", question.question_text)),
            "options": data.get("options", question.options),
            "correct": data.get("correct", question.correct),
            "weight": data.get("weight", question.weight),
        }
        validate_question(merged)

        question.question_text = merged["text"]
        question.options = merged["options"]
        question.correct = merged["correct"]
        question.weight = validate_weight(merged["weight"])
        for field in ("category", "hint", "video", "image"):
            if field in data:
                setattr(question, field, data[field])
        if not question.category:
            raise ValidationError("Category is required")

        self.session.commit()
        return question

    def delete_question(self, question_id):
        question = self.get_question(question_id)
        self.session.delete(question)
        self.session.commit()
        logger.info("Question %s deleted", question_id)
        return question

    def delete_by_category(self, course_id, category, user_id):
        if not category:
            raise ValidationError("Category is required")
        questions = (self.session.query(Question)
                     .filter(Question.course_id == course_id,
                             Question.category == category,
                             Question.user_id == user_id)
                     .all())
        for question in questions:
            self.session.delete(question)
        self.session.commit()
        return len(questions)

    def rate_question(self, question_id, rating):
        question = self.get_question(question_id)
        question.rating = validate_rating(rating)
        self.session.commit()
        return question
