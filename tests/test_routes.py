"""
Route tests.
Exercise the JSON API end to end through the test client.
"""

import pytest

BASE = '/halls/api'


@pytest.fixture
def submitted(client, booking_request):
    """Submit a valid booking request and return the response payload."""
    response = client.post(f'{BASE}/reservations', json=booking_request)
    assert response.status_code == 201
    return response.get_json()['data']


class TestHealth:
    """Tests for the service endpoints."""

    def test_health_check(self, client):
        response = client.get('/api/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'ok'
        assert data['app'] == 'HallBook'

    def test_unknown_route_is_json(self, client):
        response = client.get('/nowhere')

        assert response.status_code == 404
        assert response.get_json()['success'] is False


class TestReservationRoutes:
    """Tests for /reservations."""

    def test_submit(self, submitted):
        assert submitted['status'] == 'pending'
        assert submitted['current_state'] == 'provisionally_confirmed'
        assert submitted['approval_required'] is False
        assert submitted['token']

    def test_submit_invalid_payload(self, client, booking_request):
        booking_request['requester_email'] = 'nope'
        del booking_request['start_time']

        response = client.post(f'{BASE}/reservations', json=booking_request)

        assert response.status_code == 400
        data = response.get_json()
        assert data['code'] == 'validation_error'
        assert set(data['fields']) == {'requester_email', 'start_time'}

    @pytest.mark.parametrize('field,value', [
        ('start_time', 900),
        ('end_time', 1200),
        ('reservation_date', 20240610),
    ])
    def test_submit_numeric_values(self, client, booking_request, field, value):
        """Test numbers in the JSON body are a validation error."""
        booking_request[field] = value

        response = client.post(f'{BASE}/reservations', json=booking_request)

        assert response.status_code == 400
        data = response.get_json()
        assert data['code'] == 'validation_error'
        assert field in data['fields']

    def test_submit_outside_hours(self, client, booking_request):
        booking_request.update(start_time='17:00', end_time='18:00')

        response = client.post(f'{BASE}/reservations', json=booking_request)

        assert response.status_code == 400
        assert response.get_json()['code'] == 'validation_error'

    def test_submit_conflict(self, client, booking_request, submitted):
        booking_request.update(start_time='12:30', end_time='13:30',
                               requester_email='other@example.com')

        response = client.post(f'{BASE}/reservations', json=booking_request)

        assert response.status_code == 409
        data = response.get_json()
        assert data['code'] == 'conflict'
        assert data['details']['conflicts'][0]['start_time'] == '11:00'

    def test_classifier_unavailable(self, app, client, booking_request):
        class DownGate:
            def evaluate(self, context):
                raise TimeoutError('classifier timed out')

        app.extensions['authorization_gate'] = DownGate()

        response = client.post(f'{BASE}/reservations', json=booking_request)

        assert response.status_code == 503
        assert response.get_json()['code'] == 'classifier_unavailable'

    def test_list_by_hall_and_day(self, client, submitted):
        response = client.get(f'{BASE}/reservations',
                              query_string={'hall': 'Main Hall', 'date': '2024-06-10'})

        assert response.status_code == 200
        data = response.get_json()
        assert data['count'] == 1
        assert data['data'][0]['id'] == submitted['id']
        assert 'token' not in data['data'][0]

    def test_list_by_month(self, client, submitted):
        response = client.get(f'{BASE}/reservations', query_string={'year': 2024, 'month': 6})

        assert response.get_json()['count'] == 1

    def test_list_requires_query(self, client):
        response = client.get(f'{BASE}/reservations')

        assert response.status_code == 400

    def test_list_invalid_date(self, client):
        response = client.get(f'{BASE}/reservations',
                              query_string={'hall': 'Main Hall', 'date': '10/06/2024'})

        assert response.status_code == 400

    def test_list_invalid_month(self, client):
        response = client.get(f'{BASE}/reservations', query_string={'year': 2024, 'month': 13})

        assert response.status_code == 400

    def test_list_year_out_of_range(self, client):
        response = client.get(f'{BASE}/reservations', query_string={'year': 10000, 'month': 1})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'validation_error'


class TestAvailabilityRoutes:
    """Tests for /availability and /calendar."""

    def test_available(self, client):
        response = client.get(
            f'{BASE}/availability',
            query_string={'hall': 'Main Hall', 'date': '2024-06-10', 'start': '09:00', 'end': '10:00'}
        )

        assert response.status_code == 200
        assert response.get_json()['data']['available'] is True

    def test_unavailable(self, client, submitted):
        response = client.get(
            f'{BASE}/availability',
            query_string={'hall': 'Main Hall', 'date': '2024-06-10', 'start': '12:30', 'end': '13:00'}
        )

        assert response.get_json()['data']['available'] is False

    def test_missing_params(self, client):
        response = client.get(f'{BASE}/availability', query_string={'hall': 'Main Hall'})

        assert response.status_code == 400
        assert 'date' in response.get_json()['fields']

    def test_calendar(self, client):
        response = client.get(f'{BASE}/calendar/2024/6', query_string={'hall': 'Main Hall'})

        assert response.status_code == 200
        data = response.get_json()
        assert len(data['data']) == 30
        assert data['available_days'] == 30

    def test_calendar_invalid_month(self, client):
        response = client.get(f'{BASE}/calendar/2024/13')

        assert response.status_code == 400

    def test_calendar_year_out_of_range(self, client):
        response = client.get(f'{BASE}/calendar/10000/1')

        assert response.status_code == 400
        assert response.get_json()['code'] == 'validation_error'


class TestApprovalRoutes:
    """Tests for /approvals/<token>."""

    def test_view(self, client, submitted):
        response = client.get(f"{BASE}/approvals/{submitted['token']}")

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['id'] == submitted['id']
        assert data['current_state'] == 'provisionally_confirmed'
        assert 'token' not in data

    def test_unknown_token(self, client):
        response = client.get(f'{BASE}/approvals/not-a-token')

        assert response.status_code == 404
        assert response.get_json()['code'] == 'not_found'

    def test_approve(self, client, submitted):
        response = client.post(f"{BASE}/approvals/{submitted['token']}",
                               json={'outcome': 'approved'})

        assert response.status_code == 200
        data = response.get_json()
        assert data['data']['status'] == 'approved'
        assert data['message'] == 'Booking request approved'

    def test_reject_without_reason(self, client, submitted):
        response = client.post(f"{BASE}/approvals/{submitted['token']}",
                               json={'outcome': 'rejected'})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'missing_reason'

    def test_invalid_outcome(self, client, submitted):
        response = client.post(f"{BASE}/approvals/{submitted['token']}",
                               json={'outcome': 'maybe'})

        assert response.status_code == 400
        assert 'outcome' in response.get_json()['fields']

    def test_numeric_outcome(self, client, submitted):
        response = client.post(f"{BASE}/approvals/{submitted['token']}",
                               json={'outcome': 1, 'reason': 404})

        assert response.status_code == 400
        assert 'outcome' in response.get_json()['fields']

    def test_replay_and_conflicting_decision(self, client, submitted):
        url = f"{BASE}/approvals/{submitted['token']}"
        client.post(url, json={'outcome': 'rejected', 'reason': 'Closed for works'})

        replay = client.post(url, json={'outcome': 'rejected', 'reason': 'Again'})
        assert replay.status_code == 200
        assert replay.get_json()['data']['decision_reason'] == 'Closed for works'

        conflicting = client.post(url, json={'outcome': 'approved'})
        assert conflicting.status_code == 409
        data = conflicting.get_json()
        assert data['code'] == 'already_decided'
        assert data['reservation']['status'] == 'rejected'
        assert 'token' not in data['reservation']


class TestRequesterRoutes:
    """Tests for /requesters/<id>/reservations."""

    def test_list(self, client, submitted):
        response = client.get(f'{BASE}/requesters/grace@example.com/reservations')

        assert response.status_code == 200
        data = response.get_json()
        assert data['count'] == 1
        assert data['data'][0]['id'] == submitted['id']

    def test_empty(self, client):
        response = client.get(f'{BASE}/requesters/nobody/reservations')

        assert response.get_json()['data'] == []
