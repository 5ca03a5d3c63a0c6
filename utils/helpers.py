import numbers

import bleach
from flask import current_app

from utils.errors import ValidationError

EXAM_STATUSES = ("draft", "published", "archived")
EXAM_COMPLEXITIES = ("easy", "medium", "hard")
CONTENT_STATUSES = ("draft", "published")


def format_datetime(datetime_obj):
    """Format datetime to ISO-8601, or None."""
    if not datetime_obj:
        return None
    return datetime_obj.isoformat()


def sanitize_html(text):
    if not text:
        return text
    allowed_tags = current_app.config.get("ALLOWED_HTML_TAGS", [])
    return bleach.clean(text, tags=allowed_tags, strip=True)


def is_number(value):
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def validate_weight(weight):
    if weight is None:
        return 1.0
    if not is_number(weight) or weight <= 0:
        raise ValidationError("Weight must be a positive number")
    return float(weight)


def validate_rating(rating):
    if not is_number(rating) or rating < 1 or rating > 5:
        raise ValidationError("Rating must be a number between 1 and 5")
    return float(rating)


def same_option(selected, correct):
    # True == 1 in Python; a boolean never matches a number here
    if isinstance(selected, bool) != isinstance(correct, bool):
        return False
    return selected == correct


def validate_choice(value, choices, field_name):
    if value is not None and value not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
    return value


def validate_question(question):
    """Check one authored question: text, list of options, correct among them."""
    if not isinstance(question, dict):
        raise ValidationError("Each question must be an object.")
    text = question.get("text") or question.get("question")
    options = question.get("options")
    correct = question.get("correct")
    if not text or options is None or correct is None:
        raise ValidationError("Each question must have 'text', 'options', and 'correct'.")
    if not isinstance(options, list) or len(options) < 2:
        raise ValidationError("'options' must be a list with at least two entries.")
    if not any(same_option(correct, option) for option in options):
        raise ValidationError("The 'correct' value must be one of the options.")
    validate_weight(question.get("weight"))


def validate_id_list(ids, field_name="questionIds"):
    if not isinstance(ids, list) or not ids:
        raise ValidationError(f"{field_name} array is required and must not be empty")
    if not all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
        raise ValidationError(f"{field_name} must contain integer ids")
    if len(set(ids)) != len(ids):
        raise ValidationError(f"{field_name} must not contain duplicates")
    return ids
