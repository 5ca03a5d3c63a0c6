from models import db


class Submission(db.Model):
    """The graded attempt of one user at one exam. At most one row per pair."""
    __tablename__ = "submissions"
    __table_args__ = (
        db.UniqueConstraint("exam_id", "user_id", name="uq_submission_exam_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    exam_id = db.Column(db.Integer, db.ForeignKey("exams.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    results = db.Column(db.JSON, nullable=False)
    obtained_score = db.Column(db.Float, nullable=False, default=0.0)
    total_score = db.Column(db.Float, nullable=False, default=0.0)
    submitted_at = db.Column(db.DateTime, nullable=False)

    exam = db.relationship("Exam", back_populates="submissions")
    user = db.relationship("User", backref=db.backref("submissions", cascade="all, delete-orphan"))

    @property
    def percentage(self):
        if not self.total_score:
            return 0.0
        return self.obtained_score / self.total_score * 100

    def __repr__(self):
        return f"<Submission Exam {self.exam_id} User {self.user_id} {self.obtained_score}/{self.total_score}>"

    def to_dict(self):
        return {
            "id": self.id,
            "exam_id": self.exam_id,
            "user_id": self.user_id,
            "results": self.results or [],
            "obtainedScore": self.obtained_score,
            "totalScore": self.total_score,
            "percentage": self.percentage,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }
