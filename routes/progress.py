from flask import Blueprint, jsonify, request

from classes.progress_manager import ProgressManager
from utils.utils import current_user_id, get_json_body, login_required

progress_bp = Blueprint("progress", __name__)


@progress_bp.route("", methods=["POST"])
@login_required
def record_progress():
    progress = ProgressManager().record_progress(current_user_id(), get_json_body())
    return jsonify({"success": True, "message": "Progress saved successfully", "data": progress.to_dict()}), 201


# Summary of the last week or month
@progress_bp.route("", methods=["GET"])
@login_required
def get_progress():
    time_frame = request.args.get("timeFrame", "week")
    data = ProgressManager().detailed_progress(current_user_id(), time_frame)
    return jsonify({"success": True, "data": data}), 200


@progress_bp.route("/all", methods=["GET"])
@login_required
def get_all_progress():
    entries = ProgressManager().progress_for_user(current_user_id())
    return jsonify({"success": True, "data": [entry.to_dict() for entry in entries]}), 200


@progress_bp.route("/<int:progress_id>", methods=["DELETE"])
@login_required
def delete_progress(progress_id):
    ProgressManager().delete_progress(progress_id, current_user_id())
    return jsonify({"success": True, "message": "Progress deleted successfully"}), 200
