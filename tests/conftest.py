import os
import tempfile

# Keep the import-time database and the simulated delay out of the way before any app module loads
os.environ.setdefault("FEEDBACK_DB_PATH", os.path.join(tempfile.mkdtemp(), "feedback.db"))
os.environ.setdefault("SUBMIT_DELAY_SECONDS", "0")

from datetime import datetime, timezone

import pytest

from portal.models import database
from portal.models.feedback import FeedbackRecord

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def build_record(**overrides):
    values = dict(
        student_name="Jane Doe",
        student_id="CS2024001",
        email="jane.doe@university.edu",
        department="Computer Science",
        semester="3rd",
        faculty_name="Dr. Sarah Johnson",
        course_name="Data Structures",
        course_code="CS201",
        overall_rating="4",
        teaching_quality="4",
        course_content="4",
        communication="4",
        feedback="Clear lectures.",
        anonymous=False,
        id=1,
        submitted_at="2024-03-10T10:00:00Z",
    )
    values.update(overrides)
    return FeedbackRecord(**values)


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point storage at a fresh database file for the test."""
    path = tmp_path / "feedback.db"
    monkeypatch.setattr(database, "DATABASE_PATH", str(path))
    database.init_db()
    return path


@pytest.fixture
def valid_form():
    return {
        "studentName": "Jane Doe",
        "studentId": "CS2024001",
        "email": "jane.doe@university.edu",
        "department": "Computer Science",
        "semester": "3rd",
        "facultyName": "Dr. Sarah Johnson",
        "courseName": "Data Structures",
        "courseCode": "CS201",
        "overallRating": "5",
        "teachingQuality": "4",
        "courseContent": "4",
        "communication": "5",
        "feedback": "Great course.",
    }
