from models import db


class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    category = db.Column(db.String(100), nullable=False)
    question_text = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, nullable=False)
    correct = db.Column(db.JSON, nullable=False)
    hint = db.Column(db.Text, nullable=True)
    video = db.Column(db.String(255), nullable=True)
    image = db.Column(db.String(255), nullable=True)
    weight = db.Column(db.Float, nullable=False, default=1.0)
    rating = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    course = db.relationship("Course", back_populates="questions")
    author = db.relationship("User")

    def __repr__(self):
        return f"<Question {self.id} (Course ID {self.course_id})>"

    def to_dict(self, include_correct=True):
        data = {
            "id": self.id,
            "course_id": self.course_id,
            "course_name": self.course.title if self.course else None,
            "user_id": self.user_id,
            "category": self.category,
            "question": self.question_text,
            "options": self.options,
            "hint": self.hint,
            "video": self.video,
            "image": self.image,
            "weight": self.weight if self.weight is not None else 1.0,
            "rating": self.rating,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_correct:
            data["correct"] = self.correct
        return data
