from flask import Blueprint, render_template, request, redirect, url_for, flash, make_response, send_file, current_app
from config import TIMEFRAMES, ALL_DEPARTMENTS, EXPORT_FILENAME, REPORT_FOLDER
from portal.models import FeedbackStore
from portal.services.analytics_service import DashboardFilters, build_dashboard
from portal.services.chart_service import dashboard_charts
from portal.services.export_service import export_feedback_excel
from report_generator import generate_dashboard_report
import os
import io

dashboard_bp = Blueprint('dashboard', __name__)

def _current_view():
    filters = DashboardFilters.from_args(request.args)
    return build_dashboard(FeedbackStore.load_all(), filters)

@dashboard_bp.route('/dashboard')
def dashboard():
    view = _current_view()
    return render_template('dashboard.html',
                         view=view,
                         charts=dashboard_charts(view),
                         timeframes=TIMEFRAMES,
                         all_departments=ALL_DEPARTMENTS)

@dashboard_bp.route('/dashboard/report')
def dashboard_report():
    view = _current_view()
    action = request.args.get('action', 'view')

    try:
        pdf_path = generate_dashboard_report(
            view,
            output_dir=current_app.config.get('REPORT_FOLDER', REPORT_FOLDER)
        )

        if not pdf_path or not os.path.exists(pdf_path):
            raise ValueError("PDF file was not generated properly")

        with open(pdf_path, 'rb') as f:
            pdf_content = f.read()
    except Exception as e:
        current_app.logger.error(f"PDF Generation Error: {str(e)}")
        flash(f"Error generating PDF report: {str(e)}", "danger")
        return redirect(url_for('dashboard.dashboard', **view.filters.as_args()))

    try:
        os.remove(pdf_path)
    except OSError as e:
        current_app.logger.warning(f"Could not delete {pdf_path}: {e}")

    response = make_response(pdf_content)
    response.headers['Content-Type'] = 'application/pdf'
    disposition = 'attachment' if action == 'download' else 'inline'
    response.headers['Content-Disposition'] = f'{disposition}; filename={os.path.basename(pdf_path)}'
    return response

@dashboard_bp.route('/dashboard/export')
def dashboard_export():
    view = _current_view()
    buffer = io.BytesIO()
    export_feedback_excel(view.records, buffer)
    buffer.seek(0)
    return send_file(
        buffer,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=EXPORT_FILENAME
    )
