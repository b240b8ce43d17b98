"""
Populate the feedback store with sample submissions for demonstration.

Runs once: if the store already holds any feedback (or holds something that
cannot be read), nothing is written.
"""

import json
import logging

from config import STORAGE_KEY
from portal.models import init_db, FeedbackStore
from portal.models.database import read_value
from portal.services.analytics_service import available_departments, summary_stats

logger = logging.getLogger(__name__)

SAMPLE_FEEDBACKS = [
    {
        "id": 1,
        "studentName": "John Smith",
        "studentId": "CS2021001",
        "email": "john.smith@university.edu",
        "department": "Computer Science",
        "semester": "6th",
        "facultyName": "Dr. Sarah Johnson",
        "courseName": "Data Structures and Algorithms",
        "courseCode": "CS301",
        "overallRating": "5",
        "teachingQuality": "5",
        "courseContent": "4",
        "communication": "5",
        "feedback": "Excellent teaching methodology. Dr. Johnson explains complex algorithms in a very "
                    "understandable way. The practical assignments really helped in understanding the "
                    "concepts better.",
        "anonymous": False,
        "submittedAt": "2024-01-15T10:30:00Z",
    },
    {
        "id": 2,
        "studentName": "Emily Davis",
        "studentId": "IT2021045",
        "email": "emily.davis@university.edu",
        "department": "Information Technology",
        "semester": "4th",
        "facultyName": "Prof. Michael Chen",
        "courseName": "Database Management Systems",
        "courseCode": "IT201",
        "overallRating": "4",
        "teachingQuality": "4",
        "courseContent": "5",
        "communication": "3",
        "feedback": "The course content is comprehensive and well-structured. However, sometimes the pace "
                    "is too fast and it's hard to keep up during lectures.",
        "anonymous": False,
        "submittedAt": "2024-01-20T14:15:00Z",
    },
    {
        "id": 3,
        "studentName": "Anonymous Student",
        "studentId": "EC2020123",
        "email": "student123@university.edu",
        "department": "Electronics",
        "semester": "5th",
        "facultyName": "Dr. Lisa Wang",
        "courseName": "Digital Signal Processing",
        "courseCode": "EC401",
        "overallRating": "3",
        "teachingQuality": "3",
        "courseContent": "4",
        "communication": "2",
        "feedback": "The subject matter is interesting but the teaching style could be improved. More "
                    "interactive sessions would be helpful.",
        "anonymous": True,
        "submittedAt": "2024-01-25T09:45:00Z",
    },
    {
        "id": 4,
        "studentName": "Alex Rodriguez",
        "studentId": "ME2021078",
        "email": "alex.rodriguez@university.edu",
        "department": "Mechanical",
        "semester": "3rd",
        "facultyName": "Prof. Robert Taylor",
        "courseName": "Thermodynamics",
        "courseCode": "ME202",
        "overallRating": "5",
        "teachingQuality": "5",
        "courseContent": "5",
        "communication": "4",
        "feedback": "Outstanding professor! Makes difficult concepts easy to understand with real-world "
                    "examples. Lab sessions are very well organized.",
        "anonymous": False,
        "submittedAt": "2024-02-01T11:20:00Z",
    },
    {
        "id": 5,
        "studentName": "Priya Patel",
        "studentId": "CS2022015",
        "email": "priya.patel@university.edu",
        "department": "Computer Science",
        "semester": "2nd",
        "facultyName": "Dr. Sarah Johnson",
        "courseName": "Object Oriented Programming",
        "courseCode": "CS102",
        "overallRating": "4",
        "teachingQuality": "4",
        "courseContent": "4",
        "communication": "5",
        "feedback": "Dr. Johnson is very approachable and always ready to help. The programming "
                    "assignments are challenging but fair.",
        "anonymous": False,
        "submittedAt": "2024-02-05T16:30:00Z",
    },
    {
        "id": 6,
        "studentName": "David Kim",
        "studentId": "IT2020089",
        "email": "david.kim@university.edu",
        "department": "Information Technology",
        "semester": "6th",
        "facultyName": "Prof. Michael Chen",
        "courseName": "Web Technologies",
        "courseCode": "IT301",
        "overallRating": "3",
        "teachingQuality": "3",
        "courseContent": "4",
        "communication": "3",
        "feedback": "Good course content covering modern web technologies. However, more hands-on "
                    "practice sessions would be beneficial.",
        "anonymous": False,
        "submittedAt": "2024-02-10T13:45:00Z",
    },
    {
        "id": 7,
        "studentName": "Anonymous Student",
        "studentId": "EE2021056",
        "email": "student056@university.edu",
        "department": "Electrical",
        "semester": "4th",
        "facultyName": "Dr. Jennifer Brown",
        "courseName": "Control Systems",
        "courseCode": "EE301",
        "overallRating": "4",
        "teachingQuality": "4",
        "courseContent": "3",
        "communication": "4",
        "feedback": "Dr. Brown explains concepts clearly and is patient with student questions. The "
                    "course could benefit from more practical examples.",
        "anonymous": True,
        "submittedAt": "2024-02-15T10:15:00Z",
    },
    {
        "id": 8,
        "studentName": "Maria Garcia",
        "studentId": "CH2021034",
        "email": "maria.garcia@university.edu",
        "department": "Chemical",
        "semester": "5th",
        "facultyName": "Prof. James Wilson",
        "courseName": "Chemical Reaction Engineering",
        "courseCode": "CH401",
        "overallRating": "5",
        "teachingQuality": "5",
        "courseContent": "5",
        "communication": "5",
        "feedback": "Exceptional teaching! Prof. Wilson brings industry experience into the classroom. "
                    "The case studies are very relevant and engaging.",
        "anonymous": False,
        "submittedAt": "2024-02-20T15:00:00Z",
    },
    {
        "id": 9,
        "studentName": "Ryan Thompson",
        "studentId": "CV2020067",
        "email": "ryan.thompson@university.edu",
        "department": "Civil",
        "semester": "7th",
        "facultyName": "Dr. Amanda Lee",
        "courseName": "Structural Analysis",
        "courseCode": "CV501",
        "overallRating": "4",
        "teachingQuality": "4",
        "courseContent": "4",
        "communication": "3",
        "feedback": "Solid course with good theoretical foundation. More software-based analysis tools "
                    "could be incorporated into the curriculum.",
        "anonymous": False,
        "submittedAt": "2024-02-25T12:30:00Z",
    },
    {
        "id": 10,
        "studentName": "Sophia Martinez",
        "studentId": "MA2021012",
        "email": "sophia.martinez@university.edu",
        "department": "Mathematics",
        "semester": "3rd",
        "facultyName": "Prof. Daniel Clark",
        "courseName": "Linear Algebra",
        "courseCode": "MA201",
        "overallRating": "3",
        "teachingQuality": "3",
        "courseContent": "4",
        "communication": "2",
        "feedback": "The mathematical concepts are well-covered but the delivery could be more engaging. "
                    "More visual aids would help in understanding abstract concepts.",
        "anonymous": False,
        "submittedAt": "2024-03-01T09:00:00Z",
    },
]


def log_summary(records):
    departments = available_departments(records)
    stats = summary_stats(records)
    dates = sorted(record.submitted for record in records)

    logger.info("Sample Data Summary:")
    logger.info(f"   Departments: {len(departments)} ({', '.join(departments)})")
    logger.info(f"   Faculty Members: {stats.faculty_count}")
    logger.info(f"   Average Rating: {stats.average_rating}/5.0")
    if dates:
        logger.info(f"   Date Range: {dates[0].strftime('%b %Y')} - {dates[-1].strftime('%b %Y')}")


def seed_sample_data():
    """
    Write the sample feedback list if the store is absent or empty.
    Returns True when data was written.
    """
    init_db()
    raw = read_value(STORAGE_KEY)

    if raw is not None:
        try:
            existing = json.loads(raw)
        except ValueError as e:
            logger.error(f"Stored feedback could not be read, leaving it untouched: {e}")
            return False

        if existing:
            logger.info("Sample data already exists. Skipping seeding.")
            count = len(existing) if isinstance(existing, list) else 1
            logger.info(f"Current feedback count: {count}")
            return False

    records = FeedbackStore.parse(json.dumps(SAMPLE_FEEDBACKS))
    FeedbackStore.save_all(records)

    logger.info("Sample data seeded successfully!")
    logger.info(f"Added {len(records)} sample feedback entries")
    logger.info("You can now explore the dashboard and faculty pages with sample data")
    log_summary(records)
    return True


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    seed_sample_data()
