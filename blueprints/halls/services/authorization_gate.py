"""
Authorization gate adapters.

The gate decides whether a reservation needs a director decision. The engine
treats it as opaque: it never retries it and never interprets its reasoning.
Every adapter returns {'requires_approval': bool, 'reason': str} or raises
ClassifierUnavailableError.
"""

import logging

import httpx

from models.reservation_conflicts import to_minutes
from models.reservation_errors import ClassifierUnavailableError

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Interface for approval classifiers."""

    def evaluate(self, context: dict) -> dict:
        raise NotImplementedError


class RuleBasedAuthorizationGate(AuthorizationGate):
    """
    Deterministic gate.

    Requires approval when the booking is longer than max_hours or the hall
    is in restricted_halls.
    """

    def __init__(self, max_hours: int = 2, restricted_halls: list = None):
        self.max_hours = max_hours
        self.restricted_halls = set(restricted_halls or [])

    def evaluate(self, context: dict) -> dict:
        hall = context['hall']
        duration = to_minutes(context['end_time']) - to_minutes(context['start_time'])

        if hall in self.restricted_halls:
            return {
                'requires_approval': True,
                'reason': f"{hall} always requires director approval.",
            }
        if duration > self.max_hours * 60:
            return {
                'requires_approval': True,
                'reason': f"Bookings longer than {self.max_hours} hours require director approval.",
            }
        return {
            'requires_approval': False,
            'reason': 'Request is within standard booking limits.',
        }


class HttpAuthorizationGate(AuthorizationGate):
    """Gate backed by an external classifier reachable over HTTP."""

    def __init__(self, url: str, timeout: float = 10, client: httpx.Client = None):
        self.url = url
        self.client = client or httpx.Client(timeout=timeout)

    def evaluate(self, context: dict) -> dict:
        try:
            response = self.client.post(self.url, json=context)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Authorization classifier call failed: {e}")
            raise ClassifierUnavailableError(
                "The approval classifier is unavailable; the reservation was not created"
            ) from e

        if not isinstance(body, dict):
            body = {}
        requires_approval = body.get('requiresApproval', body.get('requires_approval'))
        if not isinstance(requires_approval, bool):
            logger.error(f"Authorization classifier returned an unexpected body: {body}")
            raise ClassifierUnavailableError(
                "The approval classifier returned an invalid verdict"
            )
        return {
            'requires_approval': requires_approval,
            'reason': str(body.get('reason') or ''),
        }


def build_authorization_gate(config) -> AuthorizationGate:
    """
    Build the gate selected by AUTHORIZATION_GATE.

    Args:
        config: Flask config mapping

    Returns:
        AuthorizationGate: Configured adapter
    """
    kind = config.get('AUTHORIZATION_GATE', 'rules')
    if kind == 'http':
        url = config.get('CLASSIFIER_URL')
        if not url:
            raise ValueError("CLASSIFIER_URL is required for the http authorization gate")
        return HttpAuthorizationGate(url, timeout=config.get('CLASSIFIER_TIMEOUT', 10))
    if kind == 'rules':
        return RuleBasedAuthorizationGate(
            max_hours=config.get('APPROVAL_MAX_HOURS', 2),
            restricted_halls=config.get('APPROVAL_REQUIRED_HALLS'),
        )
    raise ValueError(f"Unknown AUTHORIZATION_GATE: {kind}")
