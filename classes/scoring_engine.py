import logging
from collections import namedtuple
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from classes.attempt_roster import AttemptRoster
from classes.exam_manager import ExamManager
from models import db
from models.exams import Exam
from models.submissions import Submission
from utils.errors import NoQuestionsError, StoreError, TooManyAnswersError, ValidationError
from utils.helpers import format_datetime, same_option

logger = logging.getLogger(__name__)

Answer = namedtuple("Answer", ["question_id", "selected"])

ANSWER_KEYS = {"selected", "question_id"}


def parse_answers(answers):
    """Validate the submitted answer list.

    Every element is ``{"selected": value}`` and may carry ``"question_id"``.
    Either all elements carry a question id or none does.
    """
    if not isinstance(answers, list):
        raise ValidationError("Questions array is required")

    parsed = []
    for number, answer in enumerate(answers, start=1):
        if not isinstance(answer, dict) or "selected" not in answer:
            raise ValidationError(f"Answer {number} must be an object with a 'selected' key")
        unexpected = set(answer) - ANSWER_KEYS
        if unexpected:
            raise ValidationError(f"Answer {number} has unexpected keys: {', '.join(sorted(unexpected))}")

        selected = answer["selected"]
        if isinstance(selected, (dict, list)):
            raise ValidationError(f"Answer {number}: 'selected' must be a single option value")

        question_id = answer.get("question_id")
        if "question_id" in answer and (not isinstance(question_id, int) or isinstance(question_id, bool)):
            raise ValidationError(f"Answer {number}: 'question_id' must be an integer")

        parsed.append(Answer(question_id, selected))

    keyed = ["question_id" in answer for answer in answers]
    if any(keyed) and not all(keyed):
        raise ValidationError("Either every answer carries a question_id or none does")
    return parsed


def match_answers(questions, answers):
    """Selected value per question, in question order. None when unanswered."""
    if not answers or answers[0].question_id is None:
        return [answers[i].selected if i < len(answers) else None for i in range(len(questions))]

    by_id = {}
    for answer in answers:
        if answer.question_id in by_id:
            raise ValidationError(f"Question {answer.question_id} answered more than once")
        by_id[answer.question_id] = answer.selected

    known = {question["id"] for question in questions}
    unknown = sorted(set(by_id) - known)
    if unknown:
        raise ValidationError(f"Answers reference questions not in this exam: {unknown}")

    return [by_id.get(question["id"]) for question in questions]


def evaluate(questions, selections):
    """Score selections against the questions. Returns (results, obtained, total)."""
    results = []
    obtained = 0.0
    total = 0.0
    for question, selected in zip(questions, selections):
        weight = question.get("weight")
        weight = 1.0 if weight is None else float(weight)
        total += weight

        is_correct = selected is not None and same_option(selected, question["correct"])
        if is_correct:
            obtained += weight

        results.append({
            "question_id": question["id"],
            "question": question["text"],
            "selected": selected,
            "correct": question["correct"],
            "is_correct": is_correct,
            "weight": weight,
        })
    return results, obtained, total


def percentage_of(obtained, total):
    if not total:
        return 0.0
    return obtained / total * 100


class ScoringEngine:
    """Grades exam submissions and keeps one submission per (exam, user)."""

    def __init__(self, session=None, exams=None, roster=None, clock=None):
        self.session = session if session is not None else db.session
        self.exams = exams or ExamManager(self.session)
        self.roster = roster or AttemptRoster(self.session)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def submit(self, exam_id, user_id, answers):
        exam = self.exams.get_exam(exam_id)
        if exam.status != "published":
            raise ValidationError("Exam is not open for submissions")

        questions = self.exams.questions_for(exam_id)
        if not questions:
            logger.warning("Rejected submission for exam %s by user %s: no questions", exam_id, user_id)
            raise NoQuestionsError(exam_id)

        if isinstance(answers, list) and len(answers) > len(questions):
            logger.warning("Rejected submission for exam %s by user %s: %s answers for %s questions",
                           exam_id, user_id, len(answers), len(questions))
            raise TooManyAnswersError(len(answers), len(questions))

        selections = match_answers(questions, parse_answers(answers))
        results, obtained, total = evaluate(questions, selections)

        try:
            self._replace_submission(exam_id, user_id, results, obtained, total)
            self.roster.mark_attempted(exam_id, user_id)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Failed to store submission for exam %s by user %s: %s", exam_id, user_id, e)
            raise StoreError(str(e))

        logger.info("User %s scored %s/%s on exam %s", user_id, obtained, total, exam_id)
        return {
            "results": results,
            "obtainedScore": obtained,
            "totalScore": total,
            "percentage": percentage_of(obtained, total),
        }

    def get_result(self, exam_id, user_id):
        """Latest submission for the pair, or None."""
        return (self.session.query(Submission)
                .filter(Submission.exam_id == exam_id, Submission.user_id == user_id)
                .order_by(Submission.submitted_at.desc(), Submission.id.desc())
                .first())

    def get_submissions_for_user(self, user_id):
        rows = (self.session.query(Submission, Exam)
                .outerjoin(Exam, Submission.exam_id == Exam.id)
                .filter(Submission.user_id == user_id)
                .order_by(Submission.submitted_at.desc(), Submission.id.desc())
                .all())
        return [
            {
                "id": submission.id,
                "exam": exam.summary() if exam else None,
                "obtainedScore": submission.obtained_score,
                "totalScore": submission.total_score,
                "percentage": submission.percentage,
                "results": submission.results or [],
                "submitted_at": format_datetime(submission.submitted_at),
            }
            for submission, exam in rows
        ]

    def _replace_submission(self, exam_id, user_id, results, obtained, total):
        # delete and insert share the caller's transaction
        existing = (self.session.query(Submission)
                    .filter(Submission.exam_id == exam_id, Submission.user_id == user_id)
                    .with_for_update()
                    .first())
        if existing is not None:
            self.session.delete(existing)
            self.session.flush()

        submission = Submission(
            exam_id=exam_id,
            user_id=user_id,
            results=results,
            obtained_score=obtained,
            total_score=total,
            submitted_at=self.clock(),
        )
        self.session.add(submission)
        self.session.flush()
        return submission
