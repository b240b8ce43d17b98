"""
Feedback record and the composite key used to group records by faculty.
"""
from dataclasses import dataclass, asdict
from typing import NamedTuple, Optional

from config import ANONYMOUS_PLACEHOLDER
from utils import parse_rating, parse_timestamp

# Stored (camelCase) key -> dataclass attribute
FIELD_MAP = {
    'id': 'id',
    'studentName': 'student_name',
    'studentId': 'student_id',
    'email': 'email',
    'department': 'department',
    'semester': 'semester',
    'facultyName': 'faculty_name',
    'courseName': 'course_name',
    'courseCode': 'course_code',
    'overallRating': 'overall_rating',
    'teachingQuality': 'teaching_quality',
    'courseContent': 'course_content',
    'communication': 'communication',
    'feedback': 'feedback',
    'anonymous': 'anonymous',
    'submittedAt': 'submitted_at',
}

TEXT_FIELDS = [
    'studentName', 'studentId', 'email', 'department', 'semester',
    'facultyName', 'courseName', 'courseCode',
    'overallRating', 'teachingQuality', 'courseContent', 'communication',
    'feedback',
]


class FacultyKey(NamedTuple):
    """Identifies one faculty entry: the same name in two departments is two entries."""
    name: str
    department: str


@dataclass(frozen=True)
class FeedbackRecord:
    student_name: str
    student_id: str
    email: str
    department: str
    semester: str
    faculty_name: str
    course_name: str
    course_code: str
    overall_rating: str
    teaching_quality: str
    course_content: str
    communication: str
    feedback: str
    anonymous: bool = False
    id: Optional[int] = None
    submitted_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        """
        Build a record from its stored shape.

        Raises ValueError when the value is not a record (missing fields,
        wrong types, ratings outside 1-5, a non-boolean anonymous flag,
        unparseable timestamp).
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")

        values = {}
        for stored_key in TEXT_FIELDS:
            value = data.get(stored_key)
            if value is None:
                raise ValueError(f"Missing field: {stored_key}")
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise ValueError(f"Field {stored_key} must be text")
            values[FIELD_MAP[stored_key]] = str(value)

        for stored_key in ('overallRating', 'teachingQuality', 'courseContent', 'communication'):
            rating = parse_rating(data[stored_key])
            if rating is None or not 1 <= rating <= 5:
                raise ValueError(f"Field {stored_key} must be a rating between 1 and 5")

        record_id = data.get('id')
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise ValueError("Field id must be an integer")

        anonymous = data.get('anonymous', False)
        if not isinstance(anonymous, bool):
            raise ValueError("Field anonymous must be true or false")

        submitted_at = data.get('submittedAt')
        if not isinstance(submitted_at, str):
            raise ValueError("Field submittedAt must be a timestamp")
        parse_timestamp(submitted_at)

        return cls(
            anonymous=anonymous,
            id=record_id,
            submitted_at=submitted_at,
            **values
        )

    def to_dict(self):
        """Stored (camelCase) shape of the record."""
        attrs = asdict(self)
        return {stored_key: attrs[attr] for stored_key, attr in FIELD_MAP.items()}

    @property
    def key(self):
        return FacultyKey(self.faculty_name, self.department)

    @property
    def display_name(self):
        return ANONYMOUS_PLACEHOLDER if self.anonymous else self.student_name

    @property
    def course_label(self):
        return f"{self.course_name} ({self.course_code})"

    @property
    def overall(self):
        return parse_rating(self.overall_rating)

    @property
    def teaching(self):
        return parse_rating(self.teaching_quality)

    @property
    def content(self):
        return parse_rating(self.course_content)

    @property
    def communication_score(self):
        return parse_rating(self.communication)

    @property
    def submitted(self):
        return parse_timestamp(self.submitted_at)
