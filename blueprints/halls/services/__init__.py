"""Hall booking services package."""

from blueprints.halls.services.booking_service import (  # noqa: F401
    create_reservation,
    check_availability,
    monthly_calendar,
    decide,
    list_for_requester,
)
