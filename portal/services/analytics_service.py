"""
Analytics over the stored feedback list.

Every function here is a pure computation over a list of FeedbackRecord
objects: nothing is cached and inputs are never mutated, so the dashboard
and faculty pages can call them on every request.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import (
    ALL_DEPARTMENTS,
    RATING_BUCKET_COLORS,
    RATING_SCALE,
    RECENT_FEEDBACK_LIMIT,
    TIMEFRAMES,
    TOP_FACULTY_LIMIT,
    TREND_WINDOW_MONTHS,
)
from portal.models.feedback import FacultyKey, FeedbackRecord
from utils import format_average, mean, utcnow

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class DashboardFilters:
    department: str = ALL_DEPARTMENTS
    timeframe: str = 'all'

    @classmethod
    def from_args(cls, args):
        """Build filters from request query parameters, falling back to 'all' for blanks and unknown values."""
        department = (args.get('department') or ALL_DEPARTMENTS).strip() or ALL_DEPARTMENTS
        timeframe = (args.get('timeframe') or 'all').strip()
        if timeframe not in TIMEFRAMES:
            timeframe = 'all'
        return cls(department=department, timeframe=timeframe)

    def as_args(self):
        return {'department': self.department, 'timeframe': self.timeframe}


@dataclass(frozen=True)
class SummaryStats:
    count: int
    average_rating: str
    faculty_count: int
    course_count: int


@dataclass(frozen=True)
class RatingBucket:
    rating: int
    label: str
    count: int
    color: str


@dataclass(frozen=True)
class DepartmentAggregate:
    department: str
    count: int
    avg_rating: str


@dataclass(frozen=True)
class FacultyRanking:
    name: str
    count: int
    avg_rating: str


@dataclass(frozen=True)
class MonthlyTrendPoint:
    month: str
    year: int
    month_number: int
    feedbacks: int
    avg_rating: float


@dataclass
class FacultyAggregate:
    key: FacultyKey
    courses: List[str] = field(default_factory=list)
    total_feedbacks: int = 0
    ratings: Dict[str, float] = field(default_factory=dict)
    recent_feedbacks: List[FeedbackRecord] = field(default_factory=list)

    @property
    def name(self):
        return self.key.name

    @property
    def department(self):
        return self.key.department

    @property
    def average_rating(self):
        return self.ratings.get('overall', 0)


@dataclass(frozen=True)
class DirectoryTotals:
    faculty_count: int = 0
    course_count: int = 0
    feedback_count: int = 0


@dataclass(frozen=True)
class DashboardView:
    filters: DashboardFilters
    departments: List[str]
    records: List[FeedbackRecord]
    summary: SummaryStats
    distribution: List[RatingBucket]
    department_breakdown: List[DepartmentAggregate]
    top_faculty: List[FacultyRanking]
    monthly_trend: List[MonthlyTrendPoint]
    total_count: int = 0

    @property
    def is_filtered(self):
        return self.summary.count != self.total_count


def _passes_timeframe(record, max_days, now):
    if max_days is None:
        return True
    age_days = math.floor((now - record.submitted).total_seconds() / SECONDS_PER_DAY)
    return age_days <= max_days


def filter_records(records, filters, now=None) -> List[FeedbackRecord]:
    """Narrow the record list by department (exact match) and trailing-day timeframe."""
    now = now or utcnow()
    _, max_days = TIMEFRAMES.get(filters.timeframe, TIMEFRAMES['all'])

    filtered = []
    for record in records:
        if filters.department != ALL_DEPARTMENTS and record.department != filters.department:
            continue
        if not _passes_timeframe(record, max_days, now):
            continue
        filtered.append(record)
    return filtered


def available_departments(records) -> List[str]:
    """Distinct departments in first-seen order."""
    return list(dict.fromkeys(record.department for record in records))


def summary_stats(filtered) -> SummaryStats:
    total = sum(record.overall for record in filtered)
    return SummaryStats(
        count=len(filtered),
        average_rating=format_average(total, len(filtered)),
        faculty_count=len({record.faculty_name for record in filtered}),
        course_count=len({record.course_name for record in filtered}),
    )


def rating_distribution(filtered) -> List[RatingBucket]:
    """One bucket per rating value 1..5, always all five, in ascending order."""
    counts = {rating: 0 for rating in RATING_SCALE}
    for record in filtered:
        if record.overall in counts:
            counts[record.overall] += 1

    return [
        RatingBucket(
            rating=rating,
            label=f"{rating} Star" if rating == 1 else f"{rating} Stars",
            count=counts[rating],
            color=RATING_BUCKET_COLORS[rating],
        )
        for rating in RATING_SCALE
    ]


def _group(records, key_func):
    groups = {}
    for record in records:
        groups.setdefault(key_func(record), []).append(record)
    return groups


def department_breakdown(filtered) -> List[DepartmentAggregate]:
    breakdown = []
    for department, group in _group(filtered, lambda r: r.department).items():
        breakdown.append(DepartmentAggregate(
            department=department,
            count=len(group),
            avg_rating=format_average(sum(r.overall for r in group), len(group)),
        ))
    return breakdown


def top_faculty(filtered, limit=TOP_FACULTY_LIMIT) -> List[FacultyRanking]:
    """
    Faculty ranked by mean overall rating, highest first.

    Grouping is by faculty name alone. Equal averages keep the order in which
    the faculty first appear in the list.
    """
    rankings = [
        FacultyRanking(
            name=name,
            count=len(group),
            avg_rating=format_average(sum(r.overall for r in group), len(group)),
        )
        for name, group in _group(filtered, lambda r: r.faculty_name).items()
    ]
    rankings.sort(key=lambda ranking: float(ranking.avg_rating), reverse=True)
    return rankings[:limit]


def _shift_month(year, month, offset):
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def monthly_trend(filtered, window_months=TREND_WINDOW_MONTHS, now=None) -> List[MonthlyTrendPoint]:
    """
    Submission count and mean rating for each calendar month in the window,
    oldest first, ending with the current month.
    """
    now = now or utcnow()
    by_month = _group(filtered, lambda r: (r.submitted.year, r.submitted.month))

    points = []
    for offset in range(window_months - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        group = by_month.get((year, month), [])
        average = float(format_average(sum(r.overall for r in group), len(group)))
        points.append(MonthlyTrendPoint(
            month=now.replace(year=year, month=month, day=1).strftime('%b %y'),
            year=year,
            month_number=month,
            feedbacks=len(group),
            avg_rating=average,
        ))
    return points


def _aggregate(key, group, recent_limit):
    courses = list(dict.fromkeys(record.course_label for record in group))
    recent = sorted(group, key=lambda r: r.submitted, reverse=True)[:recent_limit]
    return FacultyAggregate(
        key=key,
        courses=courses,
        total_feedbacks=len(group),
        ratings={
            'overall': mean(r.overall for r in group),
            'teaching': mean(r.teaching for r in group),
            'content': mean(r.content for r in group),
            'communication': mean(r.communication_score for r in group),
        },
        recent_feedbacks=recent,
    )


def faculty_profile(records, key, recent_limit=RECENT_FEEDBACK_LIMIT) -> Optional[FacultyAggregate]:
    """Full aggregate for one faculty+department pair, or None if nobody has reviewed them."""
    group = [record for record in records if record.key == key]
    if not group:
        return None
    return _aggregate(key, group, recent_limit)


def faculty_directory(records, recent_limit=RECENT_FEEDBACK_LIMIT) -> List[FacultyAggregate]:
    """Aggregates for every faculty+department pair, best rated first."""
    aggregates = [
        _aggregate(key, group, recent_limit)
        for key, group in _group(records, lambda r: r.key).items()
    ]
    aggregates.sort(key=lambda aggregate: aggregate.average_rating, reverse=True)
    return aggregates


def directory_totals(aggregates) -> DirectoryTotals:
    """Header figures for the faculty directory. Courses are counted per faculty entry."""
    return DirectoryTotals(
        faculty_count=len(aggregates),
        course_count=sum(len(aggregate.courses) for aggregate in aggregates),
        feedback_count=sum(aggregate.total_feedbacks for aggregate in aggregates),
    )


def search_faculty(aggregates, term) -> List[FacultyAggregate]:
    """Case-insensitive match on name, department or any course."""
    needle = (term or '').strip().lower()
    if not needle:
        return list(aggregates)
    return [
        aggregate for aggregate in aggregates
        if needle in aggregate.name.lower()
        or needle in aggregate.department.lower()
        or any(needle in course.lower() for course in aggregate.courses)
    ]


def build_dashboard(records, filters, now=None) -> DashboardView:
    """Everything the dashboard page renders, computed from one snapshot of the records."""
    now = now or utcnow()
    filtered = filter_records(records, filters, now)
    logger.debug(f"Dashboard {filters}: {len(filtered)} of {len(records)} records")
    return DashboardView(
        filters=filters,
        departments=available_departments(records),
        records=filtered,
        summary=summary_stats(filtered),
        distribution=rating_distribution(filtered),
        department_breakdown=department_breakdown(filtered),
        top_faculty=top_faculty(filtered),
        monthly_trend=monthly_trend(filtered, now=now),
        total_count=len(records),
    )
