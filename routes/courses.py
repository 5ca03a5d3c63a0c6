from flask import Blueprint, jsonify

from classes.course_manager import CourseManager
from utils.utils import (
    current_user_id, ensure_owner, get_json_body, is_staff, login_required, teacher_required,
)

course_bp = Blueprint("course", __name__)

#__________________________________________________________________________________________ * Courses *__________________________________________________


@course_bp.route("", methods=["GET"])
@login_required
def get_courses():
    courses = CourseManager().all_courses()
    return jsonify({"success": True, "data": [course.to_dict() for course in courses]}), 200


# Courses of the logged-in teacher
@course_bp.route("/teacher", methods=["GET"])
@login_required
@teacher_required
def get_my_courses():
    courses = CourseManager().courses_for_teacher(current_user_id())
    return jsonify({"success": True, "data": [course.to_dict() for course in courses]}), 200


@course_bp.route("/<int:course_id>", methods=["GET"])
@login_required
def get_course(course_id):
    course = CourseManager().get_course(course_id)
    return jsonify({"success": True, "data": course.to_dict()}), 200


@course_bp.route("", methods=["POST"])
@login_required
@teacher_required
def create_course():
    course = CourseManager().create_course(current_user_id(), get_json_body())
    return jsonify({"success": True, "message": "Course created successfully", "data": course.to_dict()}), 201


@course_bp.route("/<int:course_id>", methods=["PUT"])
@login_required
@teacher_required
def update_course(course_id):
    manager = CourseManager()
    ensure_owner(manager.get_course(course_id).teacher_id, "You do not have permission to edit this course")
    course = manager.update_course(course_id, get_json_body())
    return jsonify({"success": True, "message": "Course updated successfully", "data": course.to_dict()}), 200


@course_bp.route("/<int:course_id>", methods=["DELETE"])
@login_required
@teacher_required
def delete_course(course_id):
    manager = CourseManager()
    ensure_owner(manager.get_course(course_id).teacher_id, "You do not have permission to delete this course")
    manager.delete_course(course_id)
    return jsonify({"success": True, "message": "Course deleted successfully"}), 200

#__________________________________________________________________________________________ * Lessons *__________________________________________________


# Students only see published lessons
@course_bp.route("/<int:course_id>/lessons", methods=["GET"])
@login_required
def get_lessons(course_id):
    lessons = CourseManager().lessons_for_course(course_id)
    if not is_staff():
        lessons = [lesson for lesson in lessons if lesson.status == "published"]
    return jsonify({"success": True, "data": [lesson.to_dict() for lesson in lessons]}), 200


@course_bp.route("/<int:course_id>/lessons", methods=["POST"])
@login_required
@teacher_required
def add_lesson(course_id):
    manager = CourseManager()
    ensure_owner(manager.get_course(course_id).teacher_id,
                 "You do not have permission to add lessons to this course")
    lesson = manager.create_lesson(course_id, get_json_body())
    return jsonify({"success": True, "message": "Lesson added successfully", "data": lesson.to_dict()}), 201


@course_bp.route("/<int:course_id>/lessons/reorder", methods=["PUT"])
@login_required
@teacher_required
def reorder_lessons(course_id):
    manager = CourseManager()
    ensure_owner(manager.get_course(course_id).teacher_id,
                 "You do not have permission to reorder lessons of this course")
    lessons = manager.reorder_lessons(course_id, get_json_body().get("lessonIds"))
    return jsonify({"success": True, "data": [lesson.to_dict() for lesson in lessons]}), 200


@course_bp.route("/<int:course_id>/lessons/<int:lesson_id>", methods=["GET"])
@login_required
def get_lesson(course_id, lesson_id):
    lesson = CourseManager().get_lesson(course_id, lesson_id)
    if lesson.status != "published" and not is_staff():
        return jsonify({"success": False, "message": "Lesson not found"}), 404
    return jsonify({"success": True, "data": lesson.to_dict()}), 200


@course_bp.route("/<int:course_id>/lessons/<int:lesson_id>", methods=["PUT"])
@login_required
@teacher_required
def update_lesson(course_id, lesson_id):
    manager = CourseManager()
    ensure_owner(manager.get_course(course_id).teacher_id,
                 "You do not have permission to edit lessons of this course")
    lesson = manager.update_lesson(course_id, lesson_id, get_json_body())
    return jsonify({"success": True, "message": "Lesson updated successfully", "data": lesson.to_dict()}), 200


@course_bp.route("/<int:course_id>/lessons/<int:lesson_id>", methods=["DELETE"])
@login_required
@teacher_required
def delete_lesson(course_id, lesson_id):
    manager = CourseManager()
    ensure_owner(manager.get_course(course_id).teacher_id,
                 "You do not have permission to delete lessons of this course")
    manager.delete_lesson(course_id, lesson_id)
    return jsonify({"success": True, "message": "Lesson deleted successfully"}), 200


@course_bp.route("/<int:course_id>/lessons/<int:lesson_id>/rate", methods=["POST"])
@login_required
def rate_lesson(course_id, lesson_id):
    lesson = CourseManager().rate_lesson(course_id, lesson_id, get_json_body().get("rating"))
    return jsonify({"success": True, "message": "Lesson rated successfully", "data": lesson.to_dict()}), 200
