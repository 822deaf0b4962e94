"""
Pytest configuration and fixtures.
Every test gets its own temporary authoritative and mirror databases.
"""

import os
import pytest

os.environ['FLASK_ENV'] = 'test'

from blueprints.halls.services.notification_service import NotificationSink  # noqa: E402


class RecordingSink(NotificationSink):
    """Notification sink that keeps every event for assertions."""

    def __init__(self):
        self.events = []

    def notify(self, event: dict) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> list:
        return [e for e in self.events if e['type'] == event_type]


@pytest.fixture
def notifications():
    """Recording notification sink."""
    return RecordingSink()


@pytest.fixture
def db_paths(tmp_path):
    """Temporary paths for both stores."""
    return {
        'DATABASE_PATH': str(tmp_path / 'hallbook_test.db'),
        'MIRROR_DATABASE_PATH': str(tmp_path / 'hallbook_mirror_test.db'),
    }


@pytest.fixture
def app(db_paths, notifications):
    """Create test application with isolated databases."""
    from app import create_app
    from database import init_db

    app = create_app('test', notification_sink=notifications)
    app.config.update(db_paths)

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_reservation(app):
    """Factory persisting a pending reservation straight into the store."""
    from models.reservation import create_hall_reservation

    def _make(start_time='09:00', end_time='10:00', hall='Main Hall',
              reservation_date='2024-06-10', **kwargs):
        fields = {
            'requester_name': 'Ada Lovelace',
            'requester_email': 'ada@example.com',
            'requester_id': 'ada@example.com',
        }
        fields.update(kwargs)
        return create_hall_reservation(
            hall=hall,
            reservation_date=reservation_date,
            start_time=start_time,
            end_time=end_time,
            **fields
        )

    return _make


@pytest.fixture
def booking_request():
    """Valid request payload for create_reservation and the API."""
    return {
        'requester_name': 'Grace Hopper',
        'requester_email': 'grace@example.com',
        'hall': 'Main Hall',
        'reservation_date': '2024-06-10',
        'start_time': '11:00',
        'end_time': '12:00',
    }
