import re

from utils.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must be {max_length} characters or fewer.")


def validate_email(email):
    if not email or not EMAIL_PATTERN.match(email):
        raise ValidationError("A valid email address is required.")


def validate_password(password):
    if not isinstance(password, str) or len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long.")
