"""WSGI entry point for the HallBook reservation service (gunicorn wsgi:application)."""
import os

from app import create_app

config_name = os.environ.get('FLASK_ENV', 'production')
application = create_app(config_name)
