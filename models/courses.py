from models import db
from sqlalchemy.orm import relationship


class Course(db.Model):
    __tablename__ = "courses"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)
    cover_image = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft")
    teacher_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    teacher = relationship("User", back_populates="courses")
    lessons = relationship("Lesson", back_populates="course", cascade="all, delete-orphan",
                           order_by="Lesson.position")
    exams = relationship("Exam", back_populates="course", cascade="all, delete-orphan")
    questions = relationship("Question", back_populates="course", cascade="all, delete-orphan")

    @property
    def lesson_count(self):
        return len(self.lessons)

    def __repr__(self):
        return f"<Course {self.title} (Teacher ID {self.teacher_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "cover_image": self.cover_image,
            "status": self.status,
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher.full_name if self.teacher else None,
            "lesson_count": self.lesson_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
