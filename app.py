"""
HallBook - Hall Reservation Service
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config  # noqa: E402

# Import extensions
from extensions import init_booking_services  # noqa: E402

# Import database functions
from database import close_db, init_db  # noqa: E402

from models.reservation_errors import ReservationError  # noqa: E402
from utils.api_response import api_error, api_exception  # noqa: E402
from utils.messages import get_message  # noqa: E402

logger = logging.getLogger(__name__)


def create_app(config_name=None, authorization_gate=None, notification_sink=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')
        authorization_gate: Optional gate override (tests, embedding)
        notification_sink: Optional sink override (tests, embedding)

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

    # Ensure store directories exist
    ensure_database_dirs(app)

    # Attach the authorization gate and notification sink
    init_booking_services(app, authorization_gate, notification_sink)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def ensure_database_dirs(app):
    """Create parent directories for file-backed stores."""
    for key in ('DATABASE_PATH', 'MIRROR_DATABASE_PATH'):
        path = app.config.get(key)
        if path and path != ':memory:' and os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.halls import halls_bp
    from blueprints.api.routes import api_bp

    app.register_blueprint(halls_bp, url_prefix='/halls')
    app.register_blueprint(api_bp, url_prefix='/api')


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(ReservationError)
    def reservation_error(error):
        """Translate engine exceptions into the error envelope."""
        if error.status_code >= 500:
            logger.error(f"{error.code}: {error.message}")
        else:
            logger.info(f"{error.code}: {error.message}")
        return api_exception(error)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(get_message('not_found'), 404, code='not_found')

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error(get_message('invalid_request'), 405, code='method_not_allowed')

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        for key in ('db', 'mirror_db'):
            db = g.get(key)
            if db:
                db.rollback()
        return api_error(get_message('internal_error'), 500, code='internal_error')


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize both stores with an empty schema."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('check-mirror')
    def check_mirror_command():
        """Report reservations whose mirror record is missing or stale."""
        from models.reservation import find_stale_mirror_records, get_fetch_failures

        with app.app_context():
            stale = find_stale_mirror_records()
            failures = get_fetch_failures()

        if stale:
            click.echo(f'{len(stale)} stale mirror record(s): '
                       + ', '.join(str(record['id']) for record in stale))
        else:
            click.echo('Mirror is in sync.')
        click.echo(f'{len(failures)} recorded availability fetch failure(s).')

    @app.cli.command('resync-mirror')
    def resync_mirror_command():
        """Rebuild the mirror store from the authoritative store."""
        from models.reservation import resync_mirror

        with app.app_context():
            count = resync_mirror()
        click.echo(f'Mirrored {count} reservation(s).')


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connections at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/hallbook.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('HallBook startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
