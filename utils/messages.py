"""
Centralized UI messages.
All user-facing text for API responses.
"""

MESSAGES = {
    # Success messages
    'reservation_created': 'Booking request submitted',
    'reservation_approved': 'Booking request approved',
    'reservation_rejected': 'Booking request rejected',

    # Error messages
    'invalid_request': 'Invalid request',
    'invalid_month': 'Invalid month',
    'invalid_query': 'Provide hall and date, or year and month',
    'not_found': 'Resource not found',
    'internal_error': 'An unexpected error occurred',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get a message by key with optional formatting.

    Args:
        key: Message key
        **kwargs: Format arguments

    Returns:
        Formatted message string
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        try:
            return message.format(**kwargs)
        except KeyError:
            return message
    return message
