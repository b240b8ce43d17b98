import logging
from flask import Blueprint, render_template, request, abort
from portal.models import FeedbackStore, FacultyKey
from portal.services.analytics_service import (
    directory_totals,
    faculty_directory,
    faculty_profile,
    search_faculty,
)
from portal.services.chart_service import create_rating_breakdown_chart, to_base64
from utils import rating_tier

logger = logging.getLogger(__name__)

faculty_bp = Blueprint('faculty', __name__)

@faculty_bp.route('/faculty')
def faculty_list():
    """Faculty directory, best rated first, optionally narrowed by a search term."""
    search_term = request.args.get('q', '').strip()
    aggregates = faculty_directory(FeedbackStore.load_all())
    return render_template('faculty.html',
                         faculty=search_faculty(aggregates, search_term),
                         totals=directory_totals(aggregates),
                         search_term=search_term,
                         rating_tier=rating_tier)

@faculty_bp.route('/faculty/profile')
def faculty_detail():
    """Drill-down for one faculty member within one department."""
    name = request.args.get('name', '').strip()
    department = request.args.get('department', '').strip()
    if not name or not department:
        abort(400)

    profile = faculty_profile(FeedbackStore.load_all(), FacultyKey(name, department))
    if profile is None:
        logger.info(f"No feedback found for {name} ({department})")
        abort(404)

    return render_template('faculty_profile.html',
                         faculty=profile,
                         breakdown_chart=to_base64(create_rating_breakdown_chart(profile.ratings)),
                         rating_tier=rating_tier)
