import logging

from flask import Blueprint, jsonify, request

from classes.site_content_manager import SiteContentManager
from classes.user_manager import UserManager
from utils.utils import admin_required, current_user_id, get_json_body, login_required

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)

#__________________________________________________________________________________________ * Users *__________________________________________________


@admin_bp.route("/teachers", methods=["GET"])
@login_required
@admin_required
def get_teachers():
    teachers = UserManager().users_by_role("teacher")
    return jsonify({"success": True, "data": [teacher.to_dict() for teacher in teachers]}), 200


@admin_bp.route("/teachers/<int:teacher_id>", methods=["GET"])
@login_required
@admin_required
def get_teacher_details(teacher_id):
    return jsonify({"success": True, "data": UserManager().teacher_details(teacher_id)}), 200


@admin_bp.route("/students", methods=["GET"])
@login_required
@admin_required
def get_students():
    students = UserManager().users_by_role("student")
    return jsonify({"success": True, "data": [student.to_dict() for student in students]}), 200


@admin_bp.route("/students/<int:student_id>", methods=["GET"])
@login_required
@admin_required
def get_student(student_id):
    student = UserManager().get_user(student_id, role="student")
    return jsonify({"success": True, "data": student.to_dict()}), 200


# Flip active <-> inactive
@admin_bp.route("/users/<int:user_id>/toggle-status", methods=["PUT"])
@login_required
@admin_required
def toggle_user_status(user_id):
    user = UserManager().toggle_status(user_id)
    logger.info("Admin %s toggled user %s to %s", current_user_id(), user.id, user.status)
    return jsonify({
        "success": True,
        "message": f"User status updated to {user.status}",
        "data": user.to_dict(),
    }), 200

#__________________________________________________________________________________________ * Site content *__________________________________________________


def _record_or_none(record):
    return record.to_dict() if record else None


@admin_bp.route("/privacy-policy", methods=["GET"])
def get_privacy_policy():
    return jsonify({"success": True, "data": _record_or_none(SiteContentManager().get_privacy_policy())}), 200


@admin_bp.route("/privacy-policy", methods=["POST"])
@login_required
@admin_required
def set_privacy_policy():
    policy = SiteContentManager().set_privacy_policy(get_json_body().get("content"))
    return jsonify({"success": True, "message": "Privacy policy saved", "data": policy.to_dict()}), 201


@admin_bp.route("/terms", methods=["GET"])
def get_terms():
    return jsonify({"success": True, "data": _record_or_none(SiteContentManager().get_terms())}), 200


@admin_bp.route("/terms", methods=["POST"])
@login_required
@admin_required
def set_terms():
    terms = SiteContentManager().set_terms(get_json_body().get("content"))
    return jsonify({"success": True, "message": "Terms and conditions saved", "data": terms.to_dict()}), 201

#__________________________________________________________________________________________ * Promos *__________________________________________________


@admin_bp.route("/promos", methods=["GET"])
@login_required
def get_promos():
    active_only = request.args.get("active", "").lower() in ("1", "true", "yes")
    promos = SiteContentManager().list_promos(active_only=active_only)
    return jsonify({"success": True, "data": [promo.to_dict() for promo in promos]}), 200


@admin_bp.route("/promos/<int:promo_id>", methods=["GET"])
@login_required
def get_promo(promo_id):
    return jsonify({"success": True, "data": SiteContentManager().get_promo(promo_id).to_dict()}), 200


@admin_bp.route("/promos", methods=["POST"])
@login_required
@admin_required
def create_promo():
    promo = SiteContentManager().create_promo(get_json_body())
    return jsonify({"success": True, "message": "Promo created successfully", "data": promo.to_dict()}), 201


@admin_bp.route("/promos/<int:promo_id>", methods=["PUT"])
@login_required
@admin_required
def update_promo(promo_id):
    promo = SiteContentManager().update_promo(promo_id, get_json_body())
    return jsonify({"success": True, "message": "Promo updated successfully", "data": promo.to_dict()}), 200


@admin_bp.route("/promos/<int:promo_id>", methods=["DELETE"])
@login_required
@admin_required
def delete_promo(promo_id):
    SiteContentManager().delete_promo(promo_id)
    return jsonify({"success": True, "message": "Promo deleted successfully"}), 200
