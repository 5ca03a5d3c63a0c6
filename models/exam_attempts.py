from models import db


class ExamAttempt(db.Model):
    """Roster entry: this user has attempted this exam. Rows are never removed."""
    __tablename__ = "exam_attempts"
    __table_args__ = (
        db.UniqueConstraint("exam_id", "user_id", name="uq_exam_attempt"),
    )

    id = db.Column(db.Integer, primary_key=True)
    exam_id = db.Column(db.Integer, db.ForeignKey("exams.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    first_attempted_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    exam = db.relationship("Exam", back_populates="attempts")

    def __repr__(self):
        return f"<ExamAttempt Exam {self.exam_id} User {self.user_id}>"
