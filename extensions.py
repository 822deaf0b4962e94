"""
Engine collaborators initialization.
The authorization gate and notification sink are built here and attached to
the app in app.py; request code fetches them through the accessors below.
"""

from flask import current_app


def init_booking_services(app, authorization_gate=None, notification_sink=None):
    """
    Attach the external collaborators to the app.

    Args:
        app: Flask application
        authorization_gate: Gate override (default: built from config)
        notification_sink: Sink override (default: LogNotificationSink)
    """
    from blueprints.halls.services.authorization_gate import build_authorization_gate
    from blueprints.halls.services.notification_service import LogNotificationSink

    app.extensions['authorization_gate'] = authorization_gate or build_authorization_gate(app.config)
    app.extensions['notification_sink'] = notification_sink or LogNotificationSink()


def get_authorization_gate():
    """Get the gate configured for the current app."""
    return current_app.extensions['authorization_gate']


def get_notification_sink():
    """Get the notification sink configured for the current app."""
    return current_app.extensions['notification_sink']
