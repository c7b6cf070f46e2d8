"""
Kaitori Booking - traveling-purchase appointment service
Flask application factory and initialization
"""

import os
import sqlite3
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager

# Import database functions
from database import close_db, init_db, ensure_schema

from utils.api_response import api_error
from utils.errors import BookingError, InfrastructureError
from utils.messages import get_message


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    config_class = config.get(config_name, config['default'])
    if config_name == 'production':
        config_class.validate()

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)
    app.json.ensure_ascii = False

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register request hooks
    register_request_handlers(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    login_manager.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.api.routes import api_bp
    from blueprints.admin.routes import admin_bp

    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(BookingError)
    def booking_error(error):
        """Validation, business rule, not found and auth errors."""
        extra = {}
        if getattr(error, 'rule', None):
            extra['rule'] = error.rule
        return api_error(error.message, status=error.status_code, **extra)

    @app.errorhandler(HTTPException)
    def http_error(error):
        """Routing errors (404, 405, malformed requests)."""
        if error.code == 404:
            return api_error(get_message('not_found'), status=404)
        if error.code == 405:
            return api_error(get_message('method_not_allowed'), status=405)
        return api_error(error.description, status=error.code)

    @app.errorhandler(sqlite3.Error)
    def database_error(error):
        """Datastore failures: logged in full, answered generically."""
        app.logger.error(f'Database error: {error}', exc_info=True)
        db = g.get('db')
        if db:
            db.rollback()
        failure = InfrastructureError(get_message('internal_error'))
        return api_error(failure.message, status=failure.status_code)

    @app.errorhandler(Exception)
    def internal_error(error):
        """Anything unanticipated."""
        app.logger.error(f'Unhandled error: {error}', exc_info=True)
        db = g.get('db')
        if db:
            db.rollback()
        return api_error(get_message('internal_error'), status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Reset the database: drop tables, recreate schema, seed admin."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('migrate')
    def migrate_command():
        """Create missing tables and apply pending migrations."""
        with app.app_context():
            ensure_schema(force=True)
        click.echo('Schema is up to date.')

    @app.cli.command('create-admin')
    @click.argument('username')
    @click.password_option()
    def create_admin_command(username, password):
        """Create a new admin account."""
        from models.admin import create_admin

        with app.app_context():
            ensure_schema()
            try:
                admin_id = create_admin(username=username, password=password)
                click.echo(f'Admin created successfully! ID: {admin_id}')
            except ValueError as e:
                click.echo(f'Error creating admin: {str(e)}', err=True)


def register_request_handlers(app):
    """Register request hooks."""

    @app.before_request
    def ensure_database_schema():
        """Make sure the schema exists before any handler touches the store."""
        ensure_schema()


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/kaitori.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('KaitoriBooking startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
