from models import db


class LessonProgress(db.Model):
    """One learning activity of a user, tied to a lesson, an exam, a blog or nothing."""
    __tablename__ = "lesson_progress"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    progress_name = db.Column(db.String(255), nullable=False)
    lesson_id = db.Column(db.Integer, db.ForeignKey("course_lessons.id"), nullable=True)
    exam_id = db.Column(db.Integer, db.ForeignKey("exams.id"), nullable=True)
    blog_id = db.Column(db.Integer, db.ForeignKey("blogs.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    user = db.relationship("User", backref=db.backref("progress", cascade="all, delete-orphan"))
    lesson = db.relationship("Lesson", backref=db.backref("progress", cascade="all, delete-orphan"))
    exam = db.relationship("Exam", backref=db.backref("progress", cascade="all, delete-orphan"))
    blog = db.relationship("Blog", backref=db.backref("progress", cascade="all, delete-orphan"))

    @property
    def activity(self):
        if self.lesson_id:
            return "lessons"
        if self.exam_id:
            return "exams"
        if self.blog_id:
            return "blogs"
        return "others"

    def __repr__(self):
        return f"<LessonProgress {self.progress_name} (User ID {self.user_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "progress_name": self.progress_name,
            "lesson_id": self.lesson_id,
            "exam_id": self.exam_id,
            "blog_id": self.blog_id,
            "lesson": {"id": self.lesson.id, "title": self.lesson.title} if self.lesson else None,
            "exam": {"id": self.exam.id, "title": self.exam.title} if self.exam else None,
            "blog": {"id": self.blog.id, "title": self.blog.title} if self.blog else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
