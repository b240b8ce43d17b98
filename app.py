import os
import logging
from rich.logging import RichHandler
from flask import Flask, render_template
import matplotlib
matplotlib.use("Agg")

from portal.models import init_db, FeedbackStore
from portal.services.analytics_service import summary_stats
from routes.feedback_routes import feedback_bp
from routes.dashboard_routes import dashboard_bp
from routes.faculty_routes import faculty_bp

from config import (
    REPORT_FOLDER,
    SUBMIT_DELAY_SECONDS,
)
from asgiref.wsgi import WsgiToAsgi

# Configure rich logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)

logging.root.handlers = [
    RichHandler(rich_tracebacks=True, show_path=True, tracebacks_show_locals=False,
                log_time_format="[%b %d, %Y, %I:%M:%S %p]",
                )
]
logger = logging.getLogger("feedback_portal")

app = Flask(__name__)
app.secret_key = os.environ.get('SECRET_KEY', 'your_secret_key_change_in_production')
app.config['SUBMIT_DELAY_SECONDS'] = SUBMIT_DELAY_SECONDS
app.config['REPORT_FOLDER'] = REPORT_FOLDER

# Register blueprints
app.register_blueprint(feedback_bp)
app.register_blueprint(dashboard_bp)
app.register_blueprint(faculty_bp)

init_db()

asgi_app = WsgiToAsgi(app)


@app.route("/")
def home():
    stats = summary_stats(FeedbackStore.load_all())
    return render_template("home.html", stats=stats)


@app.errorhandler(404)
def not_found(error):
    return render_template("not_found.html"), 404


def run_server(host="0.0.0.0", port=None):
    """Serve the ASGI-wrapped app with uvicorn."""
    import uvicorn

    port = port or int(os.environ.get("PORT", "5000"))
    logger.info("=" * 60)
    logger.info("Student Feedback Portal - Starting Server")
    logger.info(f"  Local:   http://localhost:{port}")
    logger.info("Press Ctrl+C to stop the server")
    logger.info("=" * 60)
    uvicorn.run(asgi_app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run_server()
