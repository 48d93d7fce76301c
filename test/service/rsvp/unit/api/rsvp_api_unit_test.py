from datetime import datetime, timedelta, timezone

import pytest

from test.service.rsvp.unit.conftest import (
    ALICE_ID,
    BOB_ID,
    DAVE_ID,
    ORGANIZER_ID,
    OTHER_ORGANIZER_ID,
)


def _event_payload(**overrides) -> dict:
    payload = {
        'title': 'Robot Build Night',
        'description': 'Bring a laptop',
        'event_date': (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
        'location': 'Engineering Hall 101',
        'capacity': 2,
    }
    payload.update(overrides)
    return payload


@pytest.mark.unit
class TestEventApi:
    def test_organization_creates_event(self, client, act_as):
        act_as(ORGANIZER_ID)

        response = client.post('/api/event', json=_event_payload())

        assert response.status_code == 201
        body = response.json()
        assert body['title'] == 'Robot Build Night'
        assert body['organization_id'] == ORGANIZER_ID

    def test_student_cannot_create_event(self, client, act_as):
        act_as(ALICE_ID)

        response = client.post('/api/event', json=_event_payload())

        assert response.status_code == 403

    def test_invalid_capacity_is_bad_request(self, client, act_as):
        act_as(ORGANIZER_ID)

        response = client.post('/api/event', json=_event_payload(capacity=0))

        assert response.status_code == 400
        assert response.json()['detail'][0]['loc'] == ['body', 'capacity']

    def test_get_event_with_fill_rate(self, client, act_as):
        act_as(ORGANIZER_ID)
        event_id = client.post('/api/event', json=_event_payload()).json()['id']
        act_as(ALICE_ID)
        client.post(f'/api/event/{event_id}/reservation')

        response = client.get(f'/api/event/{event_id}')

        assert response.status_code == 200
        body = response.json()
        assert body['reservation_count'] == 1
        assert body['fill_rate'] == 50
        assert body['is_full'] is False

    def test_unknown_event_is_not_found(self, client):
        assert client.get('/api/event/999').status_code == 404

    def test_delete_event(self, client, act_as, event, reservation_ledger):
        act_as(ALICE_ID)
        client.post(f'/api/event/{event.id}/reservation')
        act_as(ORGANIZER_ID)

        response = client.delete(f'/api/event/{event.id}')

        assert response.status_code == 204
        assert client.get(f'/api/event/{event.id}').status_code == 404
        assert reservation_ledger.rows == {}

    def test_delete_by_other_organizer_forbidden(self, client, act_as, event):
        act_as(OTHER_ORGANIZER_ID)

        assert client.delete(f'/api/event/{event.id}').status_code == 403

    def test_check_in_url(self, client, act_as, event):
        act_as(ORGANIZER_ID)

        response = client.get(f'/api/event/{event.id}/check_in_url')

        assert response.status_code == 200
        assert response.json()['url'].endswith(f'/checkin/{event.id}')


@pytest.mark.unit
class TestReservationApi:
    def test_duplicate_reservation_conflicts(self, client, act_as, event):
        act_as(ALICE_ID)

        first = client.post(f'/api/event/{event.id}/reservation')
        second = client.post(f'/api/event/{event.id}/reservation')

        assert first.status_code == 201
        assert first.json()['reservation_count'] == 1
        assert second.status_code == 409

    def test_over_capacity_is_flagged_not_rejected(self, client, act_as, event):
        for student_id in (ALICE_ID, BOB_ID):
            act_as(student_id)
            client.post(f'/api/event/{event.id}/reservation')
        act_as(DAVE_ID)

        response = client.post(f'/api/event/{event.id}/reservation')

        assert response.status_code == 201
        assert response.json()['over_capacity'] is True

    def test_organization_cannot_reserve(self, client, act_as, event):
        act_as(ORGANIZER_ID)

        assert client.post(f'/api/event/{event.id}/reservation').status_code == 403

    def test_cancel_and_list_mine(self, client, act_as):
        act_as(ORGANIZER_ID)
        event_id = client.post('/api/event', json=_event_payload()).json()['id']
        act_as(ALICE_ID)
        client.post(f'/api/event/{event_id}/reservation')

        mine = client.get('/api/reservation/my')
        cancelled = client.delete(f'/api/event/{event_id}/reservation')
        again = client.delete(f'/api/event/{event_id}/reservation')

        assert [item['event']['id'] for item in mine.json()] == [event_id]
        assert cancelled.json()['cancelled'] is True
        assert again.status_code == 200
        assert again.json()['cancelled'] is False


@pytest.mark.unit
class TestCheckInApi:
    def test_first_check_in_created_then_ok(self, client, act_as, event):
        act_as(ALICE_ID)

        first = client.post(f'/api/event/{event.id}/check_in')
        second = client.post(f'/api/event/{event.id}/check_in')

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()['already_checked_in'] is True
        assert second.json()['id'] == first.json()['id']
        assert first.json()['is_walk_in'] is True

    def test_recent_check_ins_for_owner(self, client, act_as, event):
        act_as(ALICE_ID)
        client.post(f'/api/event/{event.id}/check_in')
        act_as(ORGANIZER_ID)

        response = client.get(f'/api/event/{event.id}/check_in/recent')

        assert response.status_code == 200
        assert [e['name'] for e in response.json()] == ['Alice']

    def test_recent_limit_out_of_range(self, client, act_as, event):
        act_as(ORGANIZER_ID)

        response = client.get(f'/api/event/{event.id}/check_in/recent', params={'limit': 0})

        assert response.status_code == 400

    def test_live_feed_only_for_owner(self, client, act_as, event):
        act_as(OTHER_ORGANIZER_ID)

        assert client.get(f'/api/event/{event.id}/live').status_code == 403


@pytest.mark.unit
class TestReconciliationApi:
    @pytest.fixture
    def checked_in_event(self, client, act_as, event):
        """Alice reserved and checked in, Bob only reserved, Dave walked in"""
        for student_id in (ALICE_ID, BOB_ID):
            act_as(student_id)
            client.post(f'/api/event/{event.id}/reservation')
        for student_id in (ALICE_ID, DAVE_ID):
            act_as(student_id)
            client.post(f'/api/event/{event.id}/check_in')
        act_as(ORGANIZER_ID)
        return event

    def test_reconciliation_summary(self, client, checked_in_event):
        response = client.get(f'/api/event/{checked_in_event.id}/reconciliation')

        assert response.status_code == 200
        body = response.json()
        assert body['reservation_count'] == 2
        assert body['attendance_count'] == 2
        assert body['walk_in_count'] == 1
        assert body['attendance_rate'] == 50
        assert body['fill_rate'] == 100
        assert body['sort_by'] == 'reserved_at'
        assert body['direction'] == 'desc'
        assert {e['status'] for e in body['roster']} == {'Checked In', 'Reserved', 'Walk-in'}

    def test_toggle_name_column(self, client, checked_in_event):
        response = client.get(
            f'/api/event/{checked_in_event.id}/reconciliation', params={'toggle': 'name'}
        )

        body = response.json()
        assert body['sort_by'] == 'name'
        assert body['direction'] == 'asc'
        assert [e['name'] for e in body['roster']] == ['Alice', 'bob', 'Dave']

    def test_student_cannot_view(self, client, act_as, checked_in_event):
        act_as(ALICE_ID)

        response = client.get(f'/api/event/{checked_in_event.id}/reconciliation')

        assert response.status_code == 403

    def test_roster_csv_download(self, client, checked_in_event):
        response = client.get(f'/api/event/{checked_in_event.id}/roster.csv')

        assert response.status_code == 200
        assert response.headers['content-type'].startswith('text/csv')
        assert (
            response.headers['content-disposition']
            == 'attachment; filename="Robot_Build_Night_attendees.csv"'
        )
        lines = response.text.splitlines()
        assert lines[0] == 'Name,Email,Reserved At,Checked In At,Status'
        assert len(lines) == 4
        assert lines[-1].startswith('Dave,dave@test.com,,')
        assert lines[-1].endswith(',Walk-in')


@pytest.mark.unit
def test_health(client):
    assert client.get('/health').json()['status'] == 'healthy'
