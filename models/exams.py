from models import db
from sqlalchemy.orm import relationship


class Exam(db.Model):
    __tablename__ = "exams"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft")  # 'draft', 'published', 'archived'
    complexity = db.Column(db.String(20), nullable=True)  # 'easy', 'medium', 'hard'
    estimated_time_to_complete = db.Column(db.Integer, nullable=True)  # minutes
    rating = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="exams")
    teacher = relationship("User")
    exam_questions = relationship("ExamQuestion", back_populates="exam", cascade="all, delete-orphan",
                                  order_by="ExamQuestion.position")
    submissions = relationship("Submission", back_populates="exam", cascade="all, delete-orphan")
    attempts = relationship("ExamAttempt", back_populates="exam", cascade="all, delete-orphan",
                            order_by="ExamAttempt.id")

    @property
    def attempted(self):
        """User ids that have submitted at least once."""
        return [attempt.user_id for attempt in self.attempts]

    def __repr__(self):
        return f"<Exam {self.title} (Course ID {self.course_id})>"

    def summary(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "status": self.status,
            "complexity": self.complexity,
            "estimated_time_to_complete": self.estimated_time_to_complete,
            "rating": self.rating,
            "attempted": self.attempted,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
