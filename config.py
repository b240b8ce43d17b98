import os

# Storage configuration
STORAGE_KEY = 'feedbacks'

# Report / export configuration
REPORT_FOLDER = 'reports'
EXPORT_FILENAME = 'feedback_export.xlsx'

# Simulated network round-trip on submission (seconds)
SUBMIT_DELAY_SECONDS = float(os.environ.get('SUBMIT_DELAY_SECONDS', '2'))

# Form choices
DEPARTMENTS = [
    "Computer Science",
    "Information Technology",
    "Electronics",
    "Mechanical",
    "Civil",
    "Electrical",
    "Chemical",
    "Mathematics",
]

SEMESTERS = ["1st", "2nd", "3rd", "4th", "5th", "6th", "7th", "8th"]

# Rating criteria: stored key -> display label
RATING_FIELDS = {
    'overallRating': "Overall Rating",
    'teachingQuality': "Teaching Quality",
    'courseContent': "Course Content",
    'communication': "Communication",
}

RATING_SCALE = [1, 2, 3, 4, 5]

RATING_BUCKET_COLORS = {
    1: "#ef4444",
    2: "#f97316",
    3: "#eab308",
    4: "#22c55e",
    5: "#16a34a",
}

# Dashboard timeframe filter: value -> (label, max age in days)
TIMEFRAMES = {
    'all': ("All Time", None),
    '7days': ("Last 7 Days", 7),
    '30days': ("Last 30 Days", 30),
    '90days': ("Last 90 Days", 90),
}

ALL_DEPARTMENTS = 'all'

# Aggregation windows
RECENT_FEEDBACK_LIMIT = 5
TOP_FACULTY_LIMIT = 5
TREND_WINDOW_MONTHS = 6

ANONYMOUS_PLACEHOLDER = "Anonymous Student"
