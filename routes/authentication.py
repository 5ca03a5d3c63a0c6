import logging

from flask import Blueprint, jsonify, g

from classes.user_manager import UserManager
from utils.tokens import get_jwt_token
from utils.utils import current_user_id, get_json_body, login_required

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth_bp', __name__)


# Register
@auth_bp.route('/register', methods=['POST'])
def register():
    user = UserManager().register(get_json_body())
    return jsonify({"success": True, "message": "User registered successfully!", "data": user.to_dict()}), 201


# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    user = UserManager().authenticate(data.get("email"), data.get("password"))

    token = get_jwt_token({
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
    })
    logger.info("User %s logged in", user.id)

    return jsonify({
        "success": True,
        "message": "Login successful",
        "data": {"token": token, "user": user.to_dict(), "role": user.role},
    }), 200


# Current user
@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    user = UserManager().get_user(current_user_id())
    return jsonify({"success": True, "data": user.to_dict(), "role": g.user.get("role")}), 200
