from sqlalchemy.orm import relationship
from models import db


class Lesson(db.Model):
    __tablename__ = "course_lessons"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    content = db.Column(db.Text, nullable=True)
    video_url = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft")
    position = db.Column(db.Integer, nullable=False, default=1)
    rating = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="lessons")

    def __repr__(self):
        return f"<Lesson {self.title} (Course ID {self.course_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description if self.description is not None else "",
            "content": self.content,
            "video_url": self.video_url,
            "status": self.status,
            "position": self.position,
            "rating": self.rating,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
