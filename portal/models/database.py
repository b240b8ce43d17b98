import sqlite3
import os
from contextlib import contextmanager
import logging

logger = logging.getLogger(__name__)

DATABASE_PATH = os.environ.get('FEEDBACK_DB_PATH') or os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), 'data', 'feedback.db'
)

def get_db_path():
    """Get the database path and ensure the directory exists."""
    db_dir = os.path.dirname(DATABASE_PATH)
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir)
    return DATABASE_PATH

@contextmanager
def get_db():
    """Context manager for database connections."""
    conn = None
    try:
        conn = sqlite3.connect(get_db_path())
        conn.row_factory = sqlite3.Row
        yield conn
        conn.commit()
    except Exception as e:
        if conn:
            conn.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        if conn:
            conn.close()

def init_db():
    """Create the key-value storage table if it does not exist."""
    with get_db() as conn:
        cursor = conn.cursor()

        # Each key holds one JSON document (the feedback list lives under a single key)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()
        logger.info("Database initialized successfully")

def read_value(key):
    """Return the raw stored text for a key, or None if the key is absent."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute('SELECT value FROM storage WHERE key = ?', (key,))
        row = cursor.fetchone()
        return row[0] if row else None

def write_value(key, value):
    """Store text under a key, replacing whatever was there."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO storage (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
        ''', (key, value))
