from flask import Blueprint, jsonify, request

from classes.course_manager import CourseManager
from classes.question_manager import QuestionManager
from utils.utils import (
    current_user_id, ensure_owner, get_json_body, is_staff, login_required, teacher_required,
)

question_bp = Blueprint("question", __name__)


def _owned_course(course_id):
    course = CourseManager().get_course(course_id)
    ensure_owner(course.teacher_id, "You do not have permission to manage questions of this course")
    return course


@question_bp.route("/course/<int:course_id>", methods=["POST"])
@login_required
@teacher_required
def create_question(course_id):
    _owned_course(course_id)
    question = QuestionManager().create_question(course_id, current_user_id(), get_json_body())
    return jsonify({"success": True, "message": "Question created successfully", "data": question.to_dict()}), 201


@question_bp.route("/course/<int:course_id>/bulk", methods=["POST"])
@login_required
@teacher_required
def create_questions(course_id):
    _owned_course(course_id)
    questions = QuestionManager().create_many(course_id, current_user_id(), get_json_body())
    return jsonify({
        "success": True,
        "message": f"{len(questions)} questions created successfully",
        "data": [question.to_dict() for question in questions],
    }), 201


@question_bp.route("/course/<int:course_id>", methods=["GET"])
@login_required
@teacher_required
def get_course_questions(course_id):
    questions = QuestionManager().questions_for_course(course_id, request.args.get("category"))
    return jsonify({"success": True, "data": [question.to_dict() for question in questions]}), 200


@question_bp.route("/course/<int:course_id>/category/<string:category>", methods=["DELETE"])
@login_required
@teacher_required
def delete_questions_by_category(course_id, category):
    _owned_course(course_id)
    deleted = QuestionManager().delete_by_category(course_id, category, current_user_id())
    return jsonify({"success": True, "message": f"{deleted} questions deleted", "data": {"deleted": deleted}}), 200


@question_bp.route("/teacher", methods=["GET"])
@login_required
@teacher_required
def get_my_questions():
    questions = QuestionManager().questions_for_teacher(current_user_id())
    return jsonify({"success": True, "data": [question.to_dict() for question in questions]}), 200


@question_bp.route("/teacher/count", methods=["GET"])
@login_required
@teacher_required
def count_my_questions():
    count = QuestionManager().count_for_teacher(current_user_id())
    return jsonify({"success": True, "data": {"count": count}}), 200


@question_bp.route("/category/<string:category>", methods=["GET"])
@login_required
@teacher_required
def get_questions_by_category(category):
    questions = QuestionManager().questions_by_category(category)
    return jsonify({"success": True, "data": [question.to_dict() for question in questions]}), 200


@question_bp.route("/<int:question_id>", methods=["GET"])
@login_required
def get_question(question_id):
    question = QuestionManager().get_question(question_id)
    return jsonify({"success": True, "data": question.to_dict(include_correct=is_staff())}), 200


@question_bp.route("/<int:question_id>", methods=["PUT"])
@login_required
@teacher_required
def update_question(question_id):
    manager = QuestionManager()
    ensure_owner(manager.get_question(question_id).user_id, "You do not have permission to edit this question")
    question = manager.update_question(question_id, get_json_body())
    return jsonify({"success": True, "message": "Question updated successfully", "data": question.to_dict()}), 200


@question_bp.route("/<int:question_id>", methods=["DELETE"])
@login_required
@teacher_required
def delete_question(question_id):
    manager = QuestionManager()
    ensure_owner(manager.get_question(question_id).user_id, "You do not have permission to delete this question")
    manager.delete_question(question_id)
    return jsonify({"success": True, "message": "Question deleted successfully"}), 200


@question_bp.route("/<int:question_id>/rate", methods=["POST"])
@login_required
def rate_question(question_id):
    question = QuestionManager().rate_question(question_id, get_json_body().get("rating"))
    return jsonify({"success": True, "message": "Question rated successfully",
                    "data": question.to_dict(include_correct=is_staff())}), 200
