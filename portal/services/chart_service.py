"""
Chart images for the dashboard and faculty pages.

Charts are drawn with matplotlib and returned as PNG buffers, or as base64
text ready for an <img src="data:image/png;base64,..."> tag.
"""

import io
import base64
import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)

PRIMARY_COLOR = '#007bff'
SECONDARY_COLOR = '#16a34a'


def _finish(fig, dpi=150):
    """Render the figure to a PNG buffer and release it."""
    plt.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format='png', bbox_inches='tight', dpi=dpi)
    plt.close(fig)
    buf.seek(0)
    return buf


def to_base64(buf):
    return base64.b64encode(buf.getvalue()).decode('utf-8')


def _label_bars(ax, bars, values, fmt):
    for bar, value in zip(bars, values):
        ax.text(bar.get_x() + bar.get_width() / 2.0, bar.get_height(),
                fmt.format(value),
                ha='center', va='bottom',
                fontsize=8)


def create_rating_distribution_chart(distribution, dpi=150):
    """Bar chart of how many submissions gave each overall rating."""
    labels = [bucket.label for bucket in distribution]
    counts = [bucket.count for bucket in distribution]

    fig, ax = plt.subplots(figsize=(6, 3.5))
    bars = ax.bar(labels, counts, color=[bucket.color for bucket in distribution])
    _label_bars(ax, bars, counts, '{}')
    ax.set_ylabel('Submissions')
    ax.set_ylim(0, max(counts + [1]) * 1.2)
    ax.grid(True, axis='y', linestyle='--', alpha=0.7)
    return _finish(fig, dpi)


def create_department_chart(breakdown, dpi=150):
    """Submissions per department with the average rating on top of each bar."""
    fig, ax = plt.subplots(figsize=(6, 3.5))
    if not breakdown:
        ax.text(0.5, 0.5, 'No data', ha='center', va='center', transform=ax.transAxes)
        ax.set_axis_off()
        return _finish(fig, dpi)

    departments = [entry.department for entry in breakdown]
    counts = [entry.count for entry in breakdown]
    bars = ax.bar(departments, counts, color=PRIMARY_COLOR)
    _label_bars(ax, bars, [entry.avg_rating for entry in breakdown], 'avg {}')
    ax.set_ylabel('Submissions')
    ax.set_ylim(0, max(counts) * 1.25)
    plt.xticks(rotation=30, ha='right', fontsize=8)
    ax.grid(True, axis='y', linestyle='--', alpha=0.7)
    return _finish(fig, dpi)


def create_monthly_trend_chart(trend, dpi=150):
    """Submissions per month (line) against the month's average rating (second axis)."""
    months = [point.month for point in trend]

    fig, ax = plt.subplots(figsize=(8, 3.5))
    ax.plot(months, [point.feedbacks for point in trend],
            marker='o', color=PRIMARY_COLOR, label='Feedbacks')
    ax.set_ylabel('Feedbacks')
    ax.set_ylim(bottom=0)

    rating_ax = ax.twinx()
    rating_ax.plot(months, [point.avg_rating for point in trend],
                   marker='s', color=SECONDARY_COLOR, label='Avg Rating')
    rating_ax.set_ylabel('Avg Rating')
    rating_ax.set_ylim(0, 5)

    lines = ax.get_lines() + rating_ax.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], loc='upper left', fontsize=8)
    ax.grid(True, axis='y', linestyle='--', alpha=0.7)
    return _finish(fig, dpi)


def create_rating_breakdown_chart(ratings, dpi=150):
    """Horizontal bars for a faculty member's four criterion means."""
    labels = ['Overall', 'Teaching', 'Content', 'Communication']
    values = [ratings.get(key, 0) for key in ('overall', 'teaching', 'content', 'communication')]

    fig, ax = plt.subplots(figsize=(6, 2.5))
    bars = ax.barh(labels, values, color=PRIMARY_COLOR)
    for bar, value in zip(bars, values):
        ax.text(bar.get_width(), bar.get_y() + bar.get_height() / 2.0,
                f' {value:.1f}', va='center', fontsize=8)
    ax.set_xlim(0, 5)
    ax.invert_yaxis()
    ax.grid(True, axis='x', linestyle='--', alpha=0.7)
    return _finish(fig, dpi)


def dashboard_charts(view):
    """All dashboard charts as base64 PNG text, keyed by chart name."""
    logger.debug(f"Rendering dashboard charts for {view.summary.count} records")
    return {
        'distribution': to_base64(create_rating_distribution_chart(view.distribution)),
        'departments': to_base64(create_department_chart(view.department_breakdown)),
        'trend': to_base64(create_monthly_trend_chart(view.monthly_trend)),
    }
