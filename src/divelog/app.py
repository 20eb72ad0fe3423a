from flask import Flask, jsonify

from divelog.config import config
from divelog.dive import DiveRepository, DiveService
from divelog.errors import InvalidDiveError, NotFoundError, PersistenceError
from divelog.logging_config import setup_logging
from divelog.statistic import StatisticsService


def create_app(repository: DiveRepository = None) -> Flask:
    """
    Application factory.

    The repository is built once here and handed to both services; pass
    one in to run the app against something other than the configured
    database.
    """
    setup_logging(config.log_level, config.log_file)

    app = Flask(__name__)

    repository = repository if repository is not None else DiveRepository()
    app.dive_service = DiveService(repository)
    app.statistics_service = StatisticsService(repository)

    # Register blueprints
    from divelog.routes.dives import bp as dives_bp
    from divelog.routes.statistics import bp as statistics_bp

    app.register_blueprint(dives_bp, url_prefix="/dives")
    app.register_blueprint(statistics_bp, url_prefix="/statistics")

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(InvalidDiveError)
    def handle_invalid_dive(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e):
        app.logger.error("Database error: %s", e)
        return jsonify({"error": "Database error"}), 500

    @app.route("/health")
    def health():
        return {"status": "ok"}

    return app


# For flask run command
app = create_app()
