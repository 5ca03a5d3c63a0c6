import logging

from sqlalchemy.exc import IntegrityError

from models import db
from models.exam_attempts import ExamAttempt

logger = logging.getLogger(__name__)


class AttemptRoster:
    """Set of users who have attempted an exam.

    Membership is backed by a unique (exam_id, user_id) constraint, so a
    duplicate append from a concurrent request is absorbed rather than stored.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def has_attempted(self, exam_id, user_id):
        return self.session.query(
            self.session.query(ExamAttempt)
            .filter(ExamAttempt.exam_id == exam_id, ExamAttempt.user_id == user_id)
            .exists()
        ).scalar()

    def attempted_users(self, exam_id):
        rows = (self.session.query(ExamAttempt.user_id)
                .filter(ExamAttempt.exam_id == exam_id)
                .order_by(ExamAttempt.id)
                .all())
        return [row.user_id for row in rows]

    def attempted_exam_ids(self, user_id, exam_ids=None):
        query = self.session.query(ExamAttempt.exam_id).filter(ExamAttempt.user_id == user_id)
        if exam_ids is not None:
            query = query.filter(ExamAttempt.exam_id.in_(exam_ids))
        return {row.exam_id for row in query}

    def mark_attempted(self, exam_id, user_id):
        """Add the user to the roster. Returns False if already present.

        Does not commit; runs inside the caller's transaction.
        """
        if self.has_attempted(exam_id, user_id):
            return False
        try:
            with self.session.begin_nested():
                self.session.add(ExamAttempt(exam_id=exam_id, user_id=user_id))
        except IntegrityError:
            logger.info("User %s already on roster of exam %s", user_id, exam_id)
            return False
        return True
