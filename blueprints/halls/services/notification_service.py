"""
Notification sink adapters and fire-and-forget dispatch.

Events:
    approval_requested: sent to the director with the approval link
    decision_made: sent to the requester with the outcome

A sink failure never fails or reverts the operation that emitted the event.
"""

import logging
import threading

from flask import current_app

logger = logging.getLogger(__name__)

EVENT_APPROVAL_REQUESTED = 'approval_requested'
EVENT_DECISION_MADE = 'decision_made'

# Decision resource served by the halls API blueprint
APPROVAL_PATH = '/halls/api/approvals'


class NotificationSink:
    """Interface for notification channels."""

    def notify(self, event: dict) -> None:
        raise NotImplementedError


class LogNotificationSink(NotificationSink):
    """Writes each event as a log record (stands in for the mail channel)."""

    def notify(self, event: dict) -> None:
        reservation = event.get('reservation', {})
        logger.info(
            f"[notification] {event['type']} -> {event.get('recipient')}: "
            f"{reservation.get('hall')} on {reservation.get('reservation_date')} "
            f"{reservation.get('start_time')}-{reservation.get('end_time')} "
            f"status={reservation.get('status')}"
            + (f" link={event['approval_link']}" if event.get('approval_link') else '')
            + (f" reason={event['reason']}" if event.get('reason') else '')
        )


def _public_view(reservation: dict) -> dict:
    return {key: value for key, value in reservation.items() if key != 'token'}


def build_approval_requested_event(reservation: dict) -> dict:
    """Build the event asking the director to decide."""
    base_url = current_app.config['BASE_URL'].rstrip('/')
    return {
        'type': EVENT_APPROVAL_REQUESTED,
        'recipient': current_app.config['DIRECTOR_EMAIL'],
        'approval_link': f"{base_url}{APPROVAL_PATH}/{reservation['token']}",
        'approval_required': reservation['approval_required'],
        'classifier_reason': reservation.get('classifier_reason'),
        'reservation': _public_view(reservation),
    }


def build_decision_made_event(reservation: dict) -> dict:
    """Build the event informing the requester of the outcome."""
    return {
        'type': EVENT_DECISION_MADE,
        'recipient': reservation['requester_email'],
        'outcome': reservation['status'],
        'reason': reservation.get('decision_reason'),
        'reservation': _public_view(reservation),
    }


def _deliver(sink: NotificationSink, event: dict) -> None:
    try:
        sink.notify(event)
    except Exception as e:
        logger.error(f"Notification {event.get('type')} could not be delivered: {e}", exc_info=True)


def dispatch_notification(sink: NotificationSink, event: dict) -> None:
    """
    Fire-and-forget delivery of an event.

    Runs on a daemon thread when NOTIFICATIONS_ASYNC is set, inline otherwise.
    Never raises.
    """
    if current_app.config.get('NOTIFICATIONS_ASYNC', True):
        threading.Thread(target=_deliver, args=(sink, event), daemon=True).start()
    else:
        _deliver(sink, event)
