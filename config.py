"""
Flask application configuration classes.
Provides configuration for development, production, and testing environments.
"""

import os


def _env_list(name: str, default: str) -> list:
    """Read a comma-separated environment variable into a list."""
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    """Base configuration class with common settings."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Authoritative store
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or 'instance/hallbook.db'

    # Best-effort mirror store (denormalized copy + per-requester index)
    MIRROR_DATABASE_PATH = os.environ.get('MIRROR_DATABASE_PATH') or 'instance/hallbook_mirror.db'

    # Forms are only used for JSON input validation
    WTF_CSRF_ENABLED = False

    # Timezone
    TIMEZONE = os.environ.get('TIMEZONE', 'UTC')

    # Operational hours and slot grid
    OPERATIONAL_START_HOUR = int(os.environ.get('OPERATIONAL_START_HOUR', 9))
    OPERATIONAL_END_HOUR = int(os.environ.get('OPERATIONAL_END_HOUR', 17))
    SLOT_DURATION_MINUTES = 60
    BOOKING_TIME_STEP_MINUTES = 30

    # Mandatory idle time before and after every active reservation
    BUFFER_MINUTES = 60

    # Calendar fallback when no halls are requested
    DEFAULT_HALLS = _env_list('DEFAULT_HALLS', 'Main Hall,Seminar Room A,Conference Room B')

    # Authorization gate: 'rules' (deterministic) or 'http' (external classifier)
    AUTHORIZATION_GATE = os.environ.get('AUTHORIZATION_GATE', 'rules')
    CLASSIFIER_URL = os.environ.get('CLASSIFIER_URL')
    CLASSIFIER_TIMEOUT = float(os.environ.get('CLASSIFIER_TIMEOUT', 10))
    APPROVAL_MAX_HOURS = int(os.environ.get('APPROVAL_MAX_HOURS', 2))
    APPROVAL_REQUIRED_HALLS = _env_list('APPROVAL_REQUIRED_HALLS', '')

    # Notifications
    DIRECTOR_EMAIL = os.environ.get('DIRECTOR_EMAIL', 'director@example.com')
    BASE_URL = os.environ.get('BASE_URL', 'http://localhost:5000')
    NOTIFICATIONS_ASYNC = True

    # Approve immediately when the gate does not require a director decision
    AUTO_APPROVE_CLEARED = os.environ.get('AUTO_APPROVE_CLEARED', 'false').lower() == 'true'

    # Application settings
    APP_NAME = 'HallBook'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False

    @classmethod
    def validate(cls) -> None:
        """Validate that required production environment variables are set."""
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if not os.environ.get('DATABASE_PATH'):
            raise ValueError("DATABASE_PATH environment variable must be set in production")
        if os.environ.get('MIRROR_DATABASE_PATH') == os.environ.get('DATABASE_PATH'):
            raise ValueError("MIRROR_DATABASE_PATH must point to a separate database file")
        if os.environ.get('AUTHORIZATION_GATE') == 'http' and not os.environ.get('CLASSIFIER_URL'):
            raise ValueError("CLASSIFIER_URL must be set when AUTHORIZATION_GATE=http")


class TestConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    DATABASE_PATH = os.environ.get('DATABASE_PATH', ':memory:')
    MIRROR_DATABASE_PATH = os.environ.get('MIRROR_DATABASE_PATH', ':memory:')
    SECRET_KEY = 'test-secret-key'
    AUTHORIZATION_GATE = 'rules'
    APPROVAL_REQUIRED_HALLS = []
    NOTIFICATIONS_ASYNC = False
    AUTO_APPROVE_CLEARED = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
