import os
import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from extensions import db, migrate
from config import DevConfig, ProdConfig
from logging_setup import setup_logger


logger = logging.getLogger("app_factory")


def create_app(overrides: dict | None = None) -> Flask:
    """Initialize Flask app with DB + configuration."""
    app = Flask(__name__)

    if os.getenv("FLASK_ENV") == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)

    # Applied before extensions bind to the database URI
    if overrides:
        app.config.update(overrides)

    if not app.config.get("TESTING"):
        setup_logger(app.config["LOG_DIR"])

    db.init_app(app)
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    migrate.init_app(app, db)

    # Import models so SQLAlchemy registers tables.
    with app.app_context():
        from src.models import Patient, Appointment, Visit  # noqa: F401
        # Ensure tables exist (useful for SQLite/dev). For production, prefer migrations.
        db.create_all()

    # Register HTTP blueprints
    from src.routes.attend_booking import attend_booking_bp
    from src.routes.dashboard import dashboard_bp
    from src.routes.patients import patients_bp
    from src.routes.visit_history import visit_history_bp

    app.register_blueprint(attend_booking_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(patients_bp)
    app.register_blueprint(visit_history_bp)

    from src.cli import seed_demo_command

    app.cli.add_command(seed_demo_command)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        # JSON for every HTTP error so the SPA never receives an HTML page
        return jsonify({"message": e.description or e.name}), e.code

    logger.info(f"[create_app] ready, database={app.config['SQLALCHEMY_DATABASE_URI'].split('@')[-1]}")
    return app
