from .database import init_db, get_db, get_db_path
from .feedback import FeedbackRecord, FacultyKey
from .feedback_store import FeedbackStore

__all__ = ['init_db', 'get_db', 'get_db_path', 'FeedbackRecord', 'FacultyKey', 'FeedbackStore']
