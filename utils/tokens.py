import datetime
import logging

import jwt
from flask import current_app

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def get_jwt_token(user_data):
    """Generate JWT token with user payload"""
    if not user_data:
        raise ValueError("User data must be provided to generate JWT token")

    expiration = datetime.datetime.now(datetime.timezone.utc) + current_app.config["JWT_EXPIRES"]
    payload = {"exp": expiration, **user_data}

    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=ALGORITHM)


def decode_jwt(token):
    """Decode and validate a JWT token. Returns the payload or None."""
    try:
        return jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError:
        logger.info("Rejected invalid token")
        return None
