import logging

from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizcraft.config import config

db = SQLAlchemy()
migrate = Migrate()
compress = Compress()

__version__ = "0.1.0"


def create_app() -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizcraft.config import Config
    global config
    config = Config()

    # Validate configuration
    config.validate()

    app = Flask(__name__)

    # Load configuration from config module
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["SQLALCHEMY_DATABASE_URI"] = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    app.config["TREAT_UNANSWERED_AS_INCORRECT"] = config.TREAT_UNANSWERED_AS_INCORRECT
    if config.is_mysql:
        # Database connection pooling for performance
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "charset": "utf8mb4",
            }
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ['application/json']
    app.config["COMPRESS_LEVEL"] = 6  # Balance between compression and CPU
    app.config["COMPRESS_MIN_SIZE"] = 500  # Only compress responses > 500 bytes

    app.logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    compress.init_app(app)  # Enable response compression

    # API responses reflect the current database state
    @app.after_request
    def add_cache_headers(response):
        if response.content_type and 'application/json' in response.content_type:
            response.cache_control.no_cache = True
            response.cache_control.no_store = True
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    @app.route("/")
    def index():
        return jsonify({
            'success': True,
            'name': 'QuizCraft',
            'version': __version__,
            'api_prefix': config.API_PREFIX,
        }), 200

    # Register quiz blueprint
    from quizcraft.quiz import quiz_bp
    app.register_blueprint(quiz_bp)

    from quizcraft.cli import seed_db_command
    app.cli.add_command(seed_db_command)

    # Custom error handler for API routes to return JSON instead of HTML
    @app.errorhandler(404)
    def handle_404(e):
        """Handle 404 errors - return JSON for API routes, plain text for others."""
        path = request.path
        method = request.method
        app.logger.warning(f"404 error: {method} {path}")
        if path.startswith(config.API_PREFIX + '/'):
            return jsonify({
                'success': False,
                'error': f'Route not found: {method} {path}',
                'path': path,
                'method': method
            }), 404
        return f"Page not found: {path}", 404

    @app.errorhandler(405)
    def handle_405(e):
        """Handle 405 Method Not Allowed - return JSON for API routes."""
        path = request.path
        method = request.method
        app.logger.warning(f"405 error: {method} {path}")
        if path.startswith(config.API_PREFIX + '/'):
            return jsonify({
                'success': False,
                'error': f'Method not allowed: {method} {path}',
                'path': path,
                'method': method
            }), 405
        return e

    # Create tables if they do not exist
    with app.app_context():
        from quizcraft.quiz.models import Quiz, Question
        db.create_all()

    return app
