import json
import logging
import time
from dataclasses import replace

from config import STORAGE_KEY
from utils import utcnow, format_timestamp
from .database import read_value, write_value
from .feedback import FeedbackRecord

logger = logging.getLogger(__name__)

class FeedbackStore:
    @staticmethod
    def parse(raw):
        """
        Decode a stored value into records for display. A value that is not a
        JSON list decodes to an empty list; entries that are not records are skipped.
        """
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (ValueError, TypeError) as e:
            logger.warning(f"Stored feedback list is not valid JSON, treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Stored feedback value is a {type(data).__name__}, not a list; treating as empty")
            return []

        records = []
        for position, item in enumerate(data):
            try:
                records.append(FeedbackRecord.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping stored feedback entry {position}: {e}")
        return records

    @staticmethod
    def stored_items(raw):
        """
        Decode a stored value into its raw JSON entries, unchanged.

        Raises ValueError when the value is not a JSON list, so callers that
        write the list back never replace data they could not read.
        """
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Stored feedback list is not valid JSON: {e}")

        if not isinstance(data, list):
            raise ValueError(f"Stored feedback value is a {type(data).__name__}, not a list")
        return data

    @staticmethod
    def load_all():
        """Get all stored feedback records, oldest submission first (storage order)."""
        return FeedbackStore.parse(read_value(STORAGE_KEY))

    @staticmethod
    def save_all(records):
        """Overwrite the stored list."""
        payload = json.dumps([record.to_dict() for record in records])
        write_value(STORAGE_KEY, payload)

    @staticmethod
    def next_id(ids, now_ms=None):
        """Submission-time id, bumped past every existing id so it is never reused."""
        candidate = now_ms if now_ms is not None else int(time.time() * 1000)
        existing = [value for value in ids if isinstance(value, int) and not isinstance(value, bool)]
        if existing and candidate <= max(existing):
            candidate = max(existing) + 1
        return candidate

    @staticmethod
    def append(record):
        """
        Stamp a new record with an id and submission time and persist it
        after the existing entries, which are written back as stored.
        Returns the stored record.

        Raises ValueError when the stored value cannot be read; nothing is written.
        """
        items = FeedbackStore.stored_items(read_value(STORAGE_KEY))
        now = utcnow()
        existing_ids = [item.get('id') for item in items if isinstance(item, dict)]
        stored = replace(
            record,
            id=FeedbackStore.next_id(existing_ids, int(now.timestamp() * 1000)),
            submitted_at=format_timestamp(now),
        )
        write_value(STORAGE_KEY, json.dumps(items + [stored.to_dict()]))
        logger.info(f"Stored feedback {stored.id} for {stored.faculty_name} ({stored.department})")
        return stored

    @staticmethod
    def count():
        """Get total number of stored records."""
        return len(FeedbackStore.load_all())
