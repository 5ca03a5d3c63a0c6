import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app import create_app  # noqa: E402
from models import db  # noqa: E402
from models.courses import Course  # noqa: E402
from models.exams import Exam  # noqa: E402
from models.exam_questions import ExamQuestion  # noqa: E402
from models.questions import Question  # noqa: E402
from models.users import User  # noqa: E402
from utils.tokens import get_jwt_token  # noqa: E402


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    def _make_user(role="student", status="active", password="password123", email=None):
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@example.com",
            full_name=f"{role.capitalize()} Number{counter['n']}",
            role=role,
            status=status,
        )
        user.set_password(password)
        session.add(user)
        session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = get_jwt_token({"user_id": user.id, "email": user.email, "role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def teacher(make_user):
    return make_user("teacher")


@pytest.fixture
def student(make_user):
    return make_user("student")


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def course(session, teacher):
    course = Course(title="Algebra", description="Intro", teacher_id=teacher.id, status="published")
    session.add(course)
    session.commit()
    return course


@pytest.fixture
def make_question(session, course, teacher):
    def _make_question(correct="A", options=("A", "B", "C", "D"), weight=None, category="basics", text=None):
        question = Question(
            course_id=course.id,
            user_id=teacher.id,
            category=category,
            question_text=text or f"Pick {correct}",
            options=list(options),
            correct=correct,
            weight=weight if weight is not None else 1.0,
        )
        session.add(question)
        session.commit()
        return question

    return _make_question


@pytest.fixture
def build_exam(session, course, teacher, make_question):
    """Exam bound to one question per (correct, weight) pair, positions from 1."""
    def _build_exam(bindings=(), status="published", category="basics", title="Quiz"):
        exam = Exam(course_id=course.id, user_id=teacher.id, title=title, status=status, category=category)
        session.add(exam)
        session.flush()
        for position, (correct, weight) in enumerate(bindings, start=1):
            question = make_question(correct=correct, weight=weight)
            session.add(ExamQuestion(exam_id=exam.id, course_id=course.id,
                                     question_id=question.id, position=position))
        session.commit()
        return exam

    return _build_exam
