"""Unit tests for portal.services.analytics_service.

All time-dependent calls take a fixed ``now`` so results are deterministic.
"""

from datetime import timedelta

from portal.models.feedback import FacultyKey
from portal.services.analytics_service import (
    DashboardFilters,
    available_departments,
    build_dashboard,
    directory_totals,
    department_breakdown,
    faculty_directory,
    faculty_profile,
    filter_records,
    monthly_trend,
    rating_distribution,
    search_faculty,
    summary_stats,
    top_faculty,
)
from utils import format_timestamp


def _two_record_scenario(make_record):
    return [
        make_record(id=1, overall_rating="5", department="CS", faculty_name="A",
                    submitted_at="2024-03-01T10:00:00Z"),
        make_record(id=2, overall_rating="3", department="CS", faculty_name="A",
                    submitted_at="2024-03-02T10:00:00Z"),
    ]


def _mixed_records(make_record):
    return [
        make_record(id=1, overall_rating="5", department="Computer Science", faculty_name="Dr. Sarah Johnson"),
        make_record(id=2, overall_rating="2", department="Mechanical", faculty_name="Prof. Robert Taylor"),
        make_record(id=3, overall_rating="4", department="Computer Science", faculty_name="Dr. Sarah Johnson"),
        make_record(id=4, overall_rating="1", department="Civil", faculty_name="Dr. Amanda Lee"),
        make_record(id=5, overall_rating="3", department="Mechanical", faculty_name="Prof. James Wilson"),
        make_record(id=6, overall_rating="5", department="Civil", faculty_name="Prof. Daniel Clark"),
        make_record(id=7, overall_rating="4", department="Chemical", faculty_name="Dr. Lisa Wang"),
    ]


# --- summary_stats --- #


def test_summary_stats_empty_set_is_zero():
    stats = summary_stats([])

    assert stats.count == 0
    assert stats.average_rating == "0"
    assert stats.faculty_count == 0
    assert stats.course_count == 0


def test_two_record_scenario(make_record):
    records = _two_record_scenario(make_record)

    stats = summary_stats(records)
    assert stats.count == 2
    assert stats.average_rating == "4.0"

    breakdown = department_breakdown(records)
    assert [(d.department, d.count, d.avg_rating) for d in breakdown] == [("CS", 2, "4.0")]

    ranking = top_faculty(records)
    assert [(f.name, f.count, f.avg_rating) for f in ranking] == [("A", 2, "4.0")]


def test_summary_average_rounds_halves_up(make_record):
    records = [make_record(id=i, overall_rating=r) for i, r in enumerate(["5", "4", "4", "4"])]

    # 17 / 4 = 4.25
    assert summary_stats(records).average_rating == "4.3"


def test_summary_counts_distinct_faculty_and_courses(make_record):
    records = [
        make_record(id=1, faculty_name="A", course_name="Algebra"),
        make_record(id=2, faculty_name="A", course_name="Calculus"),
        make_record(id=3, faculty_name="B", course_name="Algebra"),
    ]

    stats = summary_stats(records)
    assert stats.faculty_count == 2
    assert stats.course_count == 2


# --- rating_distribution --- #


def test_rating_distribution_always_has_five_ordered_buckets():
    buckets = rating_distribution([])

    assert [b.rating for b in buckets] == [1, 2, 3, 4, 5]
    assert [b.label for b in buckets] == ["1 Star", "2 Stars", "3 Stars", "4 Stars", "5 Stars"]
    assert all(b.count == 0 for b in buckets)


def test_rating_distribution_counts_sum_to_record_count(make_record):
    records = _mixed_records(make_record)
    buckets = rating_distribution(records)

    assert sum(b.count for b in buckets) == len(records)
    assert {b.rating: b.count for b in buckets} == {1: 1, 2: 1, 3: 1, 4: 2, 5: 2}


# --- department_breakdown --- #


def test_department_breakdown_counts_sum_and_keep_first_seen_order(make_record):
    records = _mixed_records(make_record)
    breakdown = department_breakdown(records)

    assert sum(d.count for d in breakdown) == len(records)
    assert [d.department for d in breakdown] == ["Computer Science", "Mechanical", "Civil", "Chemical"]
    assert breakdown[0].avg_rating == "4.5"
    assert breakdown[2].avg_rating == "3.0"


# --- top_faculty --- #


def test_top_faculty_sorted_descending_and_limited(make_record):
    ranking = top_faculty(_mixed_records(make_record), limit=3)

    assert len(ranking) == 3
    averages = [float(f.avg_rating) for f in ranking]
    assert averages == sorted(averages, reverse=True)
    assert ranking[0].name == "Prof. Daniel Clark"


def test_top_faculty_ties_keep_first_seen_order(make_record):
    records = [
        make_record(id=1, faculty_name="Second", overall_rating="4"),
        make_record(id=2, faculty_name="First", overall_rating="5"),
        make_record(id=3, faculty_name="Third", overall_rating="4"),
    ]

    assert [f.name for f in top_faculty(records)] == ["First", "Second", "Third"]


def test_top_faculty_groups_by_name_across_departments(make_record):
    records = [
        make_record(id=1, faculty_name="A", department="Civil", overall_rating="5"),
        make_record(id=2, faculty_name="A", department="Mechanical", overall_rating="4"),
    ]

    ranking = top_faculty(records)
    assert len(ranking) == 1
    assert ranking[0].count == 2
    assert ranking[0].avg_rating == "4.5"


# --- monthly_trend --- #


def test_monthly_trend_has_exact_window_ending_at_current_month(now):
    trend = monthly_trend([], window_months=6, now=now)

    assert len(trend) == 6
    assert [p.month for p in trend] == ["Oct 23", "Nov 23", "Dec 23", "Jan 24", "Feb 24", "Mar 24"]
    assert all(p.feedbacks == 0 and p.avg_rating == 0 for p in trend)


def test_monthly_trend_buckets_by_calendar_month(make_record, now):
    records = [
        make_record(id=1, overall_rating="5", submitted_at="2024-03-01T00:30:00Z"),
        make_record(id=2, overall_rating="4", submitted_at="2024-03-14T10:00:00Z"),
        make_record(id=3, overall_rating="2", submitted_at="2024-02-29T23:59:00Z"),
        make_record(id=4, overall_rating="3", submitted_at="2023-03-10T10:00:00Z"),
    ]

    trend = monthly_trend(records, window_months=3, now=now)

    assert [(p.month, p.feedbacks, p.avg_rating) for p in trend] == [
        ("Jan 24", 0, 0),
        ("Feb 24", 1, 2.0),
        ("Mar 24", 2, 4.5),
    ]


def test_monthly_trend_window_is_configurable(now):
    assert len(monthly_trend([], window_months=12, now=now)) == 12
    assert monthly_trend([], window_months=1, now=now)[0].month == "Mar 24"


# --- filter_records --- #


def test_filter_by_department(make_record, now):
    records = _mixed_records(make_record)
    filtered = filter_records(records, DashboardFilters(department="Civil"), now)

    assert [r.id for r in filtered] == [4, 6]


def test_filter_by_trailing_days_uses_whole_days(make_record, now):
    records = [
        make_record(id=1, submitted_at=format_timestamp(now - timedelta(days=7, hours=23))),
        make_record(id=2, submitted_at=format_timestamp(now - timedelta(days=8))),
        make_record(id=3, submitted_at=format_timestamp(now - timedelta(hours=1))),
    ]

    filtered = filter_records(records, DashboardFilters(timeframe="7days"), now)

    assert [r.id for r in filtered] == [1, 3]


def test_filters_from_args_fall_back_to_all():
    filters = DashboardFilters.from_args({"department": "", "timeframe": "365days"})

    assert filters == DashboardFilters(department="all", timeframe="all")


def test_available_departments_in_first_seen_order(make_record):
    records = _mixed_records(make_record)

    assert available_departments(records) == ["Computer Science", "Mechanical", "Civil", "Chemical"]


# --- faculty aggregates --- #


def test_faculty_profile_collects_courses_means_and_recent(make_record):
    records = [
        make_record(id=i, faculty_name="Dr. Sarah Johnson", department="Computer Science",
                    course_name="Data Structures" if i % 2 else "Algorithms",
                    course_code="CS201" if i % 2 else "CS301",
                    overall_rating=str(1 + i % 5), teaching_quality="4",
                    course_content="3", communication="5",
                    submitted_at=f"2024-03-{i:02d}T09:00:00Z")
        for i in range(1, 8)
    ]
    records.append(make_record(id=99, faculty_name="Someone Else"))

    profile = faculty_profile(records, FacultyKey("Dr. Sarah Johnson", "Computer Science"))

    assert profile.total_feedbacks == 7
    assert profile.courses == ["Data Structures (CS201)", "Algorithms (CS301)"]
    assert profile.ratings["teaching"] == 4
    assert profile.ratings["content"] == 3
    assert profile.ratings["communication"] == 5
    assert profile.average_rating == profile.ratings["overall"]
    assert [r.id for r in profile.recent_feedbacks] == [7, 6, 5, 4, 3]


def test_faculty_profile_unknown_key_returns_none(make_record):
    assert faculty_profile([make_record()], FacultyKey("Nobody", "Civil")) is None


def test_faculty_key_does_not_collide_on_separator(make_record):
    records = [
        make_record(id=1, faculty_name="A-B", department="C"),
        make_record(id=2, faculty_name="A", department="B-C"),
    ]

    directory = faculty_directory(records)

    assert len(directory) == 2
    assert faculty_profile(records, FacultyKey("A-B", "C")).total_feedbacks == 1


def test_faculty_directory_splits_departments_and_sorts_by_rating(make_record):
    records = [
        make_record(id=1, faculty_name="A", department="Civil", overall_rating="3"),
        make_record(id=2, faculty_name="A", department="Mechanical", overall_rating="5"),
        make_record(id=3, faculty_name="B", department="Civil", overall_rating="4"),
    ]

    directory = faculty_directory(records)

    assert [(f.name, f.department) for f in directory] == [("A", "Mechanical"), ("B", "Civil"), ("A", "Civil")]


def test_search_faculty_matches_name_department_and_course(make_record):
    directory = faculty_directory([
        make_record(id=1, faculty_name="Dr. Lisa Wang", department="Electronics", course_name="Signals"),
        make_record(id=2, faculty_name="Prof. James Wilson", department="Chemical", course_name="Reactions"),
    ])

    assert [f.name for f in search_faculty(directory, "wang")] == ["Dr. Lisa Wang"]
    assert [f.name for f in search_faculty(directory, "CHEMICAL")] == ["Prof. James Wilson"]
    assert [f.name for f in search_faculty(directory, "signals")] == ["Dr. Lisa Wang"]
    assert len(search_faculty(directory, "  ")) == 2


def test_directory_totals_sum_courses_and_feedbacks(make_record):
    directory = faculty_directory([
        make_record(id=1, faculty_name="A", department="Civil", course_name="Surveying"),
        make_record(id=2, faculty_name="A", department="Civil", course_name="Structures"),
        make_record(id=3, faculty_name="A", department="Civil", course_name="Surveying"),
        make_record(id=4, faculty_name="A", department="Mechanical", course_name="Surveying"),
    ])

    totals = directory_totals(directory)

    assert totals.faculty_count == 2
    assert totals.course_count == 3
    assert totals.feedback_count == 4
    assert directory_totals([]).course_count == 0


# --- dashboard --- #


def test_build_dashboard_is_pure_and_repeatable(make_record, now):
    records = _mixed_records(make_record)
    snapshot = list(records)
    filters = DashboardFilters(department="Computer Science")

    first = build_dashboard(records, filters, now)
    second = build_dashboard(records, filters, now)

    assert first == second
    assert records == snapshot
    assert first.summary.count == 2
    assert first.departments == ["Computer Science", "Mechanical", "Civil", "Chemical"]
    assert len(first.monthly_trend) == 6


def test_build_dashboard_keeps_unfiltered_total(make_record, now):
    records = _mixed_records(make_record)

    narrowed = build_dashboard(records, DashboardFilters(department="Civil"), now)
    everything = build_dashboard(records, DashboardFilters(), now)

    assert narrowed.summary.count == 2
    assert narrowed.total_count == 7
    assert narrowed.is_filtered
    assert everything.total_count == 7
    assert not everything.is_filtered
