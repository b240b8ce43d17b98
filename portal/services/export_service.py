"""
Service for exporting feedback records to Excel.
"""

import pandas as pd
import logging
from typing import List

from portal.models.feedback import FeedbackRecord

logger = logging.getLogger(__name__)

# Column order of the exported sheet. Contact details (email, student id) are never exported.
EXPORT_COLUMNS = [
    'id', 'submittedAt', 'student', 'department', 'semester',
    'facultyName', 'courseName', 'courseCode',
    'overallRating', 'teachingQuality', 'courseContent', 'communication',
    'feedback',
]

def records_to_dataframe(records: List[FeedbackRecord]) -> pd.DataFrame:
    """
    Flatten records into a DataFrame with integer rating columns.
    Anonymous submissions carry the placeholder name.
    """
    rows = []
    for record in records:
        rows.append({
            'id': record.id,
            'submittedAt': record.submitted_at,
            'student': record.display_name,
            'department': record.department,
            'semester': record.semester,
            'facultyName': record.faculty_name,
            'courseName': record.course_name,
            'courseCode': record.course_code,
            'overallRating': record.overall,
            'teachingQuality': record.teaching,
            'courseContent': record.content,
            'communication': record.communication_score,
            'feedback': record.feedback,
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

def export_feedback_excel(records: List[FeedbackRecord], output_path) -> str:
    """
    Write the records to an Excel workbook.

    Returns:
        The path (or buffer) that was written to
    """
    df = records_to_dataframe(records)
    df.to_excel(output_path, index=False, sheet_name='Feedback', engine='openpyxl')
    logger.info(f"Exported {len(df)} feedback records")
    return output_path
