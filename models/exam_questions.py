from models import db


class ExamQuestion(db.Model):
    __tablename__ = "exam_questions"
    __table_args__ = (
        db.UniqueConstraint("exam_id", "position", name="uq_exam_question_position"),
        db.UniqueConstraint("exam_id", "question_id", name="uq_exam_question"),
    )

    id = db.Column(db.Integer, primary_key=True)
    exam_id = db.Column(db.Integer, db.ForeignKey("exams.id"), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=True)
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    position = db.Column(db.Integer, nullable=False)

    exam = db.relationship("Exam", back_populates="exam_questions")
    question = db.relationship("Question", backref=db.backref("exam_bindings", cascade="all, delete-orphan"))

    def __repr__(self):
        return f"<ExamQuestion Exam {self.exam_id} Question {self.question_id} @ {self.position}>"
