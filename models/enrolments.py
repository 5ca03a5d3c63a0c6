from models import db


class Enrolment(db.Model):
    __tablename__ = 'enrolments'
    __table_args__ = (
        db.UniqueConstraint("student_id", "course_id", name="uq_enrolment_student_course"),
    )

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    enrolled_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    student = db.relationship("User", backref=db.backref("enrolments", cascade="all, delete-orphan"))
    course = db.relationship("Course", backref=db.backref("enrolments", cascade="all, delete-orphan"))

    def __repr__(self):
        return f"<Enrolment Student {self.student_id} Course {self.course_id}>"

    def to_dict(self):
        return {
            "id": self.id,
            "student_id": self.student_id,
            "course_id": self.course_id,
            "enrolled_at": self.enrolled_at.isoformat() if self.enrolled_at else None,
        }
