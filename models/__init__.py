from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User

from models.courses import Course
from models.course_lessons import Lesson
from models.enrolments import Enrolment

from models.questions import Question
from models.exams import Exam
from models.exam_questions import ExamQuestion
from models.submissions import Submission
from models.exam_attempts import ExamAttempt

from models.site_content import PrivacyPolicy, TermsConditions, Promo

from models.blogs import Blog
from models.lesson_progress import LessonProgress
