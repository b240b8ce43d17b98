"""
Validation of submitted feedback forms.
"""

import re
import logging
from typing import Dict

from config import DEPARTMENTS, SEMESTERS, RATING_FIELDS
from portal.models.feedback import FeedbackRecord, FIELD_MAP, TEXT_FIELDS
from utils import parse_rating

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')

REQUIRED_MESSAGES = {
    'studentName': "Student name is required",
    'studentId': "Student ID is required",
    'email': "Email is required",
    'department': "Department is required",
    'semester': "Semester is required",
    'facultyName': "Faculty name is required",
    'courseName': "Course name is required",
    'courseCode': "Course code is required",
    'overallRating': "Overall rating is required",
    'teachingQuality': "Teaching quality rating is required",
    'courseContent': "Course content rating is required",
    'communication': "Communication rating is required",
    'feedback': "Feedback is required",
}

CHOICES = {
    'department': DEPARTMENTS,
    'semester': SEMESTERS,
}


def _text(form, field_name):
    value = form.get(field_name)
    return '' if value is None else str(value).strip()


def validate_submission(form) -> Dict[str, str]:
    """
    Check a submitted form.

    Returns a mapping of field name to error message for every field that
    fails; an empty mapping means the submission can be stored.
    """
    errors = {}

    for field_name, message in REQUIRED_MESSAGES.items():
        if not _text(form, field_name):
            errors[field_name] = message

    email = _text(form, 'email')
    if email and not EMAIL_PATTERN.search(email):
        errors['email'] = "Email is invalid"

    for field_name, choices in CHOICES.items():
        value = _text(form, field_name)
        if value and value not in choices:
            errors[field_name] = f"{field_name.capitalize()} is invalid"

    for field_name, label in RATING_FIELDS.items():
        value = _text(form, field_name)
        if not value:
            continue
        rating = parse_rating(value)
        if rating is None or not 1 <= rating <= 5:
            errors[field_name] = f"{label} must be between 1 and 5"

    if errors:
        logger.info(f"Submission rejected: {', '.join(sorted(errors))}")
    return errors


def build_record(form) -> FeedbackRecord:
    """Turn an accepted form into an unsaved record (no id or timestamp yet)."""
    values = {FIELD_MAP[field_name]: _text(form, field_name) for field_name in TEXT_FIELDS}
    for field_name in RATING_FIELDS:
        values[FIELD_MAP[field_name]] = str(parse_rating(values[FIELD_MAP[field_name]]))
    anonymous = _text(form, 'anonymous').lower() in ('on', 'true', '1', 'yes')
    return FeedbackRecord(anonymous=anonymous, **values)
