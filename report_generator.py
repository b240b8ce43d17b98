import os
import logging
from datetime import datetime
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, Image
from werkzeug.utils import secure_filename

from config import TIMEFRAMES, ALL_DEPARTMENTS
from portal.services.chart_service import create_rating_distribution_chart, create_monthly_trend_chart

logger = logging.getLogger(__name__)

TABLE_STYLE = TableStyle([
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 8),
    ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
    ('ALIGN', (0, 0), (0, -1), 'LEFT'),
    ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
    ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('TOPPADDING', (0, 0), (-1, -1), 1),
    ('BOTTOMPADDING', (0, 0), (-1, -1), 1),
    ('LEFTPADDING', (0, 0), (-1, -1), 2),
    ('RIGHTPADDING', (0, 0), (-1, -1), 2),
])

def draw_footer(canvas, doc):
    """Generation timestamp and page number at the bottom of every page."""
    canvas.saveState()
    canvas.setFont("Helvetica", 7)
    canvas.setFillColor(colors.gray)
    canvas.drawString(25, 20, f"Generated {datetime.now().strftime('%d %b %Y, %I:%M %p')}")
    canvas.drawRightString(doc.pagesize[0] - 25, 20, f"Page {doc.page}")
    canvas.restoreState()

def _filter_description(filters):
    department = "All Departments" if filters.department == ALL_DEPARTMENTS else filters.department
    timeframe = TIMEFRAMES.get(filters.timeframe, TIMEFRAMES['all'])[0]
    return f"Department: {department}    Timeframe: {timeframe}"

def report_filename(filters):
    department = "all" if filters.department == ALL_DEPARTMENTS else filters.department
    return secure_filename(f"feedback_report_{department}_{filters.timeframe}.pdf")

def generate_dashboard_report(view, output_dir='.'):
    """Generate a PDF summary of a dashboard view. Returns the path of the written file."""
    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.abspath(os.path.join(output_dir, report_filename(view.filters)))
    logger.info(f"Generating report: {filepath}")

    doc = SimpleDocTemplate(
        filepath,
        pagesize=A4,
        rightMargin=20,
        leftMargin=20,
        topMargin=20,
        bottomMargin=40
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=14,
        alignment=1,
        spaceAfter=4
    )
    info_style = ParagraphStyle(
        'InfoStyle',
        parent=styles['Normal'],
        fontSize=9,
        alignment=1,
        spaceAfter=6
    )
    section_style = ParagraphStyle(
        'SectionTitle',
        parent=styles['Normal'],
        fontSize=10,
        leading=12,
        fontName='Helvetica-Bold',
        spaceBefore=6,
        spaceAfter=3
    )

    elements = []
    elements.append(Paragraph("STUDENT FEEDBACK ANALYTICS", title_style))
    elements.append(Paragraph(_filter_description(view.filters), info_style))

    summary = view.summary
    summary_table = Table([
        ['Total Feedbacks', 'Average Rating', 'Faculty Members', 'Courses'],
        [str(summary.count), f"{summary.average_rating} / 5", str(summary.faculty_count), str(summary.course_count)],
    ], colWidths=[doc.width / 4.0] * 4)
    summary_table.setStyle(TABLE_STYLE)
    elements.append(summary_table)
    elements.append(Spacer(1, 6))

    elements.append(Paragraph("Rating Distribution", section_style))
    distribution_img = Image(create_rating_distribution_chart(view.distribution, dpi=200))
    distribution_img.drawWidth = doc.width * 0.7
    distribution_img.drawHeight = 2.2 * inch
    elements.append(distribution_img)

    elements.append(Paragraph("Monthly Trends", section_style))
    trend_img = Image(create_monthly_trend_chart(view.monthly_trend, dpi=200))
    trend_img.drawWidth = doc.width * 0.9
    trend_img.drawHeight = 2.2 * inch
    elements.append(trend_img)

    elements.append(Paragraph("Department Breakdown", section_style))
    department_rows = [['Department', 'Feedbacks', 'Avg Rating']]
    for entry in view.department_breakdown:
        department_rows.append([entry.department, str(entry.count), entry.avg_rating])
    department_table = Table(department_rows, colWidths=[doc.width * 0.5, doc.width * 0.25, doc.width * 0.25])
    department_table.setStyle(TABLE_STYLE)
    elements.append(department_table)

    elements.append(Paragraph("Top Rated Faculty", section_style))
    faculty_rows = [['Rank', 'Faculty', 'Feedbacks', 'Avg Rating']]
    for rank, faculty in enumerate(view.top_faculty, start=1):
        faculty_rows.append([f"#{rank}", faculty.name, str(faculty.count), faculty.avg_rating])
    faculty_table = Table(faculty_rows, colWidths=[doc.width * 0.1, doc.width * 0.5, doc.width * 0.2, doc.width * 0.2])
    faculty_table.setStyle(TABLE_STYLE)
    elements.append(faculty_table)

    try:
        doc.build(elements, onFirstPage=draw_footer, onLaterPages=draw_footer)
        logger.info(f"Report saved: {filepath}")
        return filepath
    except Exception as e:
        logger.error(f"PDF generation failed: {str(e)}")
        raise

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    from portal.models import init_db, FeedbackStore
    from portal.services.analytics_service import DashboardFilters, build_dashboard

    init_db()
    view = build_dashboard(FeedbackStore.load_all(), DashboardFilters())
    filepath = generate_dashboard_report(view)
    logger.info(f"Report ready: {filepath}")
