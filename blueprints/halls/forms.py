"""
Hall booking forms using Flask-WTF.
Validate the shape of JSON and query-string input before it reaches the
booking service. CSRF is disabled: these back a JSON API.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, DateField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Optional, Regexp, AnyOf


def _as_text(valuelist):
    """Coerce JSON scalars (numbers, booleans, null) to the strings WTForms expects."""
    text = []
    for value in valuelist:
        if value is None:
            value = ''
        elif not isinstance(value, str):
            value = str(value)
        text.append(value)
    return text


class TextField(StringField):
    """StringField that accepts non-string JSON values."""

    def process_formdata(self, valuelist):
        super().process_formdata(_as_text(valuelist))


class NoteField(TextAreaField):
    """TextAreaField that accepts non-string JSON values."""

    def process_formdata(self, valuelist):
        super().process_formdata(_as_text(valuelist))


class DayField(DateField):
    """DateField that accepts non-string JSON values."""

    def process_formdata(self, valuelist):
        super().process_formdata(_as_text(valuelist))


TIME_REGEX = r'^([01][0-9]|2[0-3]):[0-5][0-9]$'
TIME_MESSAGE = 'Use the HH:MM format'


class ReservationRequestForm(FlaskForm):
    """Reservation request submitted by a requester."""

    class Meta:
        csrf = False

    requester_name = TextField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(min=2, max=200, message='Name must be at least 2 characters')
    ])

    requester_email = TextField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])

    requester_id = TextField('Requester ID', validators=[
        Optional(),
        Length(max=200)
    ])

    hall = TextField('Hall', validators=[
        DataRequired(message='Hall preference is required'),
        Length(max=100)
    ])

    reservation_date = DayField('Date', format='%Y-%m-%d', validators=[
        DataRequired(message='Booking date is required')
    ])

    start_time = TextField('Start time', validators=[
        DataRequired(message='Start time is required'),
        Regexp(TIME_REGEX, message=TIME_MESSAGE)
    ])

    end_time = TextField('End time', validators=[
        DataRequired(message='End time is required'),
        Regexp(TIME_REGEX, message=TIME_MESSAGE)
    ])

    def to_request(self) -> dict:
        """Return the cleaned request for the booking service."""
        return {
            'requester_name': self.requester_name.data,
            'requester_email': self.requester_email.data,
            'requester_id': self.requester_id.data or None,
            'hall': self.hall.data,
            'reservation_date': self.reservation_date.data,
            'start_time': self.start_time.data,
            'end_time': self.end_time.data,
        }


class AvailabilityQueryForm(FlaskForm):
    """Availability query from the query string."""

    class Meta:
        csrf = False

    hall = TextField('Hall', validators=[DataRequired(message='Hall is required')])

    date = DayField('Date', format='%Y-%m-%d', validators=[
        DataRequired(message='Date is required')
    ])

    start = TextField('Start time', validators=[
        DataRequired(message='Start time is required'),
        Regexp(TIME_REGEX, message=TIME_MESSAGE)
    ])

    end = TextField('End time', validators=[
        DataRequired(message='End time is required'),
        Regexp(TIME_REGEX, message=TIME_MESSAGE)
    ])


class DecisionForm(FlaskForm):
    """Director decision submitted through the approval link."""

    class Meta:
        csrf = False

    outcome = TextField('Outcome', validators=[
        DataRequired(message='Outcome is required'),
        AnyOf(['approved', 'rejected'], message='Outcome must be approved or rejected')
    ])

    reason = NoteField('Reason', validators=[
        Optional(),
        Length(max=1000)
    ])


def form_errors(form) -> dict:
    """Flatten WTForms errors to {field: first message}."""
    return {field: messages[0] for field, messages in form.errors.items() if messages}
