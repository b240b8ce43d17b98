import logging
import threading
import time
from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from config import DEPARTMENTS, SEMESTERS, RATING_FIELDS, RATING_SCALE
from portal.models import FeedbackStore
from portal.services.validation_service import validate_submission, build_record

logger = logging.getLogger(__name__)

feedback_bp = Blueprint('feedback', __name__)

# Held for the simulated round-trip + append so a second trigger cannot append twice
_submission_lock = threading.Lock()

def _render_form(form=None, errors=None, status=200):
    return render_template('submit_feedback.html',
                         form=form or {},
                         errors=errors or {},
                         departments=DEPARTMENTS,
                         semesters=SEMESTERS,
                         rating_fields=RATING_FIELDS,
                         rating_scale=RATING_SCALE), status

@feedback_bp.route('/submit-feedback', methods=['GET', 'POST'])
def submit_feedback():
    if request.method == 'GET':
        return _render_form()

    form = request.form.to_dict()
    errors = validate_submission(form)
    if errors:
        flash("Validation Error: Please fill in all required fields correctly.", "danger")
        return _render_form(form, errors, status=400)

    if not _submission_lock.acquire(blocking=False):
        flash("A submission is already in progress. Please wait.", "warning")
        return _render_form(form, status=409)

    try:
        # Simulated network round-trip; nothing is written until it completes
        time.sleep(current_app.config.get('SUBMIT_DELAY_SECONDS', 0))
        stored = FeedbackStore.append(build_record(form))
    except Exception as e:
        logger.exception(f"Feedback submission failed: {e}")
        flash("Submission Failed: Please try again later.", "danger")
        return _render_form(form, status=500)
    finally:
        _submission_lock.release()

    logger.info(f"Feedback {stored.id} submitted")
    flash("Feedback Submitted Successfully! Thank you for your valuable feedback.", "success")
    return redirect(url_for('feedback.submit_feedback'))
