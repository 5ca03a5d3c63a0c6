import logging

from sqlalchemy import func

from classes.validators import validate_email, validate_length, validate_password
from models import db
from models.courses import Course
from models.exams import Exam
from models.questions import Question
from models.users import User
from utils.errors import AuthError, ConflictError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

SELF_REGISTER_ROLES = ("student", "teacher")


class UserManager:
    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def register(self, data):
        full_name = (data.get("full_name") or "").strip()
        email = (data.get("email") or "").strip().lower()
        password = data.get("password")
        role = data.get("role") or "student"

        if not full_name or not email or not password:
            raise ValidationError("full_name, email and password are required")
        if role not in SELF_REGISTER_ROLES:
            raise ValidationError("Invalid role. Must be 'student' or 'teacher'")
        validate_length("full_name", full_name, 100)
        validate_email(email)
        validate_password(password)

        if self.session.query(User).filter(func.lower(User.email) == email).first():
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            full_name=full_name,
            display_name=data.get("display_name") or full_name.split(" ")[0],
            contact_number=data.get("contact_number"),
            role=role,
        )
        user.set_password(password)
        self.session.add(user)
        self.session.commit()
        logger.info("Registered %s user %s", role, user.id)
        return user

    def authenticate(self, email, password):
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.session.query(User).filter(func.lower(User.email) == email.strip().lower()).first()
        if not user or not user.check_password(password):
            raise AuthError("Invalid email or password")
        if not user.is_active:
            raise ForbiddenError("Your account is inactive. Please contact the administrator.")
        return user

    def get_user(self, user_id, role=None):
        user = self.session.get(User, user_id)
        if user is None or (role and user.role != role):
            raise NotFoundError(f"{(role or 'user').capitalize()} not found")
        return user

    def users_by_role(self, role):
        return (self.session.query(User)
                .filter(User.role == role)
                .order_by(User.date_created.desc(), User.id.desc())
                .all())

    def toggle_status(self, user_id, role=None):
        user = self.get_user(user_id, role)
        user.status = "inactive" if user.status == "active" else "active"
        self.session.commit()
        logger.info("User %s status set to %s", user.id, user.status)
        return user

    def teacher_details(self, teacher_id):
        teacher = self.get_user(teacher_id, role="teacher")
        courses = (self.session.query(Course)
                   .filter(Course.teacher_id == teacher.id)
                   .order_by(Course.created_at.desc())
                   .all())
        exam_count = self.session.query(func.count(Exam.id)).filter(Exam.user_id == teacher.id).scalar()
        question_count = self.session.query(func.count(Question.id)).filter(Question.user_id == teacher.id).scalar()
        return {
            **teacher.to_dict(),
            "courses": [course.to_dict() for course in courses],
            "exam_count": exam_count or 0,
            "question_count": question_count or 0,
        }
