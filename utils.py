"""
Formatting and parsing helpers shared by the models, services and routes.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal('0.1')


def utcnow():
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value):
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.
    Naive values are treated as UTC.
    """
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(moment):
    """Render a datetime the way new records store it, e.g. 2024-01-15T10:30:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def parse_rating(value):
    """Return the integer rating for a stored rating string, or None if it is not a whole number."""
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return None


def mean(values):
    """Arithmetic mean; 0 for an empty sequence."""
    values = list(values)
    if not values:
        return 0
    return sum(values) / len(values)


def format_average(total, count):
    """
    One-decimal average rendered as text. The float quotient is rounded
    half up on its exact binary value, so 23/20 (1.1499...) gives "1.1"
    and 17/4 (exactly 4.25) gives "4.3".
    Returns "0" when there is nothing to average.
    """
    if count == 0:
        return "0"
    value = Decimal(total / count).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return f"{value}"


def rating_tier(rating):
    """Bucket a mean rating for badge colouring."""
    if rating >= 4.5:
        return 'excellent'
    if rating >= 4.0:
        return 'good'
    if rating >= 3.5:
        return 'average'
    if rating >= 3.0:
        return 'fair'
    return 'poor'
