from flask import Blueprint, jsonify

from classes.enrolment_manager import EnrolmentManager
from utils.utils import current_user_id, get_json_body, login_required, roles_required

student_bp = Blueprint("student", __name__)

student_required = roles_required("student")


@student_bp.route("/courses/<int:course_id>/enroll", methods=["POST"])
@login_required
@student_required
def enroll(course_id):
    enrolment = EnrolmentManager().enroll_student(course_id, current_user_id())
    return jsonify({"success": True, "message": "Enrolled successfully", "data": enrolment.to_dict()}), 201


@student_bp.route("/courses", methods=["GET"])
@login_required
@student_required
def get_enrolled_courses():
    courses = EnrolmentManager().enrolled_courses(current_user_id())
    return jsonify({"success": True, "data": [course.to_dict() for course in courses]}), 200


# Published exams of a course, with the caller's attempt flag
@student_bp.route("/courses/<int:course_id>/exams", methods=["GET"])
@login_required
def get_published_exams(course_id):
    exams = EnrolmentManager().published_exams(course_id, current_user_id())
    return jsonify({"success": True, "data": exams}), 200


@student_bp.route("/exams/<int:exam_id>/rate", methods=["POST"])
@login_required
def rate_exam(exam_id):
    exam = EnrolmentManager().rate_exam(exam_id, get_json_body().get("rating"))
    return jsonify({"success": True, "message": "Exam rated successfully",
                    "data": {"id": exam.id, "rating": exam.rating}}), 200
