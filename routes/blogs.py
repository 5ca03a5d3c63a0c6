from flask import Blueprint, jsonify

from classes.blog_manager import BlogManager
from classes.course_manager import CourseManager
from utils.errors import NotFoundError
from utils.utils import (
    current_user_id, ensure_owner, get_json_body, is_staff, login_required, teacher_required,
)

blog_bp = Blueprint("blog", __name__)


def _owned_blog(manager, blog_id):
    blog = manager.get_blog(blog_id)
    ensure_owner(blog.course.teacher_id if blog.course else None,
                 "You do not have permission to modify this blog")
    return blog

#__________________________________________________________________________________________ * Teacher blogs *__________________________________________________


# Blogs of the logged-in teacher's courses
@blog_bp.route("", methods=["GET"])
@login_required
@teacher_required
def get_my_blogs():
    return jsonify({"success": True, "data": BlogManager().blogs_for_teacher(current_user_id())}), 200


@blog_bp.route("/teacher/<int:teacher_id>", methods=["GET"])
@login_required
def get_teacher_blogs(teacher_id):
    blogs = BlogManager().blogs_for_teacher(teacher_id)
    if not is_staff():
        blogs = [blog for blog in blogs if blog["status"] == "published"]
    return jsonify({"success": True, "data": blogs}), 200


@blog_bp.route("/courses/<int:course_id>", methods=["POST"])
@login_required
@teacher_required
def create_blog(course_id):
    course = CourseManager().get_course(course_id)
    ensure_owner(course.teacher_id, "You do not have permission to add blogs to this course")
    blog = BlogManager().create_blog(course_id, current_user_id(), get_json_body())
    return jsonify({"success": True, "message": "Blog created successfully", "data": blog.to_dict()}), 201

#__________________________________________________________________________________________ * Blogs *__________________________________________________


# Students only see published blogs
@blog_bp.route("/course/<int:course_id>", methods=["GET"])
@login_required
def get_course_blogs(course_id):
    CourseManager().get_course(course_id)
    blogs = BlogManager().blogs_for_course(course_id, published_only=not is_staff())
    return jsonify({"success": True, "data": [blog.to_dict() for blog in blogs]}), 200


@blog_bp.route("/<int:blog_id>", methods=["GET"])
@login_required
def get_blog(blog_id):
    blog = BlogManager().get_blog(blog_id)
    if blog.status != "published" and not is_staff():
        raise NotFoundError("Blog not found")
    return jsonify({"success": True, "data": blog.to_dict()}), 200


@blog_bp.route("/<int:blog_id>", methods=["PUT"])
@login_required
@teacher_required
def update_blog(blog_id):
    manager = BlogManager()
    _owned_blog(manager, blog_id)
    blog = manager.update_blog(blog_id, get_json_body())
    return jsonify({"success": True, "message": "Blog updated successfully", "data": blog.to_dict()}), 200


@blog_bp.route("/<int:blog_id>", methods=["DELETE"])
@login_required
@teacher_required
def delete_blog(blog_id):
    manager = BlogManager()
    _owned_blog(manager, blog_id)
    manager.delete_blog(blog_id)
    return jsonify({"success": True, "message": "Blog deleted successfully"}), 200
