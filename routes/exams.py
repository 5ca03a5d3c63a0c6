from flask import Blueprint, jsonify

from classes.course_manager import CourseManager
from classes.exam_manager import ExamManager
from classes.scoring_engine import ScoringEngine
from utils.errors import NotFoundError, ValidationError
from utils.utils import (
    current_user_id, ensure_owner, get_json_body, is_staff, login_required, teacher_required,
)

exam_bp = Blueprint("exam", __name__)


def _owned_exam(manager, exam_id):
    exam = manager.get_exam(exam_id)
    ensure_owner(exam.user_id, "You do not have permission to modify this exam")
    return exam


def _visible_exam(manager, exam_id):
    exam = manager.get_exam(exam_id)
    if exam.status != "published" and not is_staff():
        raise NotFoundError("Exam not found")
    return exam


def _question_payload(questions):
    if is_staff():
        return questions
    return [{k: v for k, v in question.items() if k != "correct"} for question in questions]

#__________________________________________________________________________________________ * Exams *__________________________________________________


@exam_bp.route("/course/<int:course_id>", methods=["POST"])
@login_required
@teacher_required
def create_exam(course_id):
    course = CourseManager().get_course(course_id)
    ensure_owner(course.teacher_id, "You do not have permission to add exams to this course")
    exam = ExamManager().create_exam(course_id, current_user_id(), get_json_body())
    return jsonify({"success": True, "message": "Exam created successfully", "data": exam.to_dict()}), 201


@exam_bp.route("/course/<int:course_id>", methods=["GET"])
@login_required
def get_course_exams(course_id):
    CourseManager().get_course(course_id)
    exams = ExamManager().exams_for_course(course_id)
    if not is_staff():
        exams = [exam for exam in exams if exam.status == "published"]
    return jsonify({"success": True, "data": [exam.to_dict() for exam in exams]}), 200


@exam_bp.route("/teacher", methods=["GET"])
@login_required
@teacher_required
def get_my_exams():
    return jsonify({"success": True, "data": ExamManager().exams_for_teacher(current_user_id())}), 200


# All submissions of the caller, newest first
@exam_bp.route("/submissions/exam", methods=["GET"])
@login_required
def get_my_submissions():
    submissions = ScoringEngine().get_submissions_for_user(current_user_id())
    return jsonify({"success": True, "data": submissions}), 200


@exam_bp.route("/<int:exam_id>", methods=["GET"])
@login_required
def get_exam(exam_id):
    manager = ExamManager()
    exam = _visible_exam(manager, exam_id)
    data = exam.to_dict()
    data["questions"] = _question_payload(manager.questions_for(exam_id))
    return jsonify({"success": True, "data": data}), 200


@exam_bp.route("/<int:exam_id>", methods=["PUT"])
@login_required
@teacher_required
def update_exam(exam_id):
    manager = ExamManager()
    _owned_exam(manager, exam_id)
    exam = manager.update_exam(exam_id, get_json_body())
    return jsonify({"success": True, "message": "Exam updated successfully", "data": exam.to_dict()}), 200


@exam_bp.route("/<int:exam_id>", methods=["DELETE"])
@login_required
@teacher_required
def delete_exam(exam_id):
    manager = ExamManager()
    _owned_exam(manager, exam_id)
    manager.delete_exam(exam_id)
    return jsonify({"success": True, "message": "Exam deleted successfully"}), 200

#__________________________________________________________________________________________ * Exam questions *__________________________________________________


@exam_bp.route("/<int:exam_id>/questions", methods=["GET"])
@login_required
def get_exam_questions(exam_id):
    manager = ExamManager()
    _visible_exam(manager, exam_id)
    return jsonify({"success": True, "data": _question_payload(manager.questions_for(exam_id))}), 200


@exam_bp.route("/<int:exam_id>/questions", methods=["POST"])
@login_required
@teacher_required
def add_exam_questions(exam_id):
    manager = ExamManager()
    _owned_exam(manager, exam_id)
    result = manager.add_questions(exam_id, get_json_body().get("questionIds"))
    return jsonify(result), 200


@exam_bp.route("/<int:exam_id>/questions", methods=["DELETE"])
@login_required
@teacher_required
def remove_exam_questions(exam_id):
    manager = ExamManager()
    _owned_exam(manager, exam_id)
    result = manager.remove_questions(exam_id, get_json_body().get("questionIds"))
    return jsonify(result), 200

#__________________________________________________________________________________________ * Submissions *__________________________________________________


@exam_bp.route("/<int:exam_id>/submit", methods=["POST"])
@login_required
def submit_exam(exam_id):
    answers = get_json_body().get("questions")
    if not isinstance(answers, list):
        raise ValidationError("Questions array is required")

    data = ScoringEngine().submit(exam_id, current_user_id(), answers)
    return jsonify({"success": True, "data": data}), 200


@exam_bp.route("/<int:exam_id>/result", methods=["GET"])
@login_required
def get_exam_result(exam_id):
    submission = ScoringEngine().get_result(exam_id, current_user_id())
    if submission is None:
        raise NotFoundError("No submission found for this exam")
    return jsonify({"success": True, "data": submission.to_dict()}), 200
