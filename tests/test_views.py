import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from donors.feed import ACCEPT_MESSAGE
from donors.store import CacheStore

REQUESTS_KEY = 'lifelink_requests'
SESSION_KEY = 'lifelink_donor_session'


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def shared_store(stored_requests):
    store = CacheStore()
    store.write(REQUESTS_KEY, stored_requests)
    return store


def set_session(client, key, value):
    session = client.session
    session[key] = value
    session.save()


def test_health(client):
    response = client.get(reverse('health_check'))
    assert response.status_code == 200
    assert response.json() == {'status': 'healthy'}


def test_feed_for_demo_donor(client, shared_store):
    response = client.get(reverse('donors:alert_feed'))

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'available'
    assert data['donor']['id'] == 'D-101'
    assert data['count'] == 1
    assert data['alerts'][0]['id'] == 'r1'
    assert data['alerts'][0]['state'] == 'incoming'


def test_feed_for_session_donor(client, shared_store):
    set_session(client, SESSION_KEY, {
        'id': 'D-7', 'name': 'Asha', 'bloodGroup': 'O-', 'lat': 40.01, 'lng': 40.0,
    })

    data = client.get(reverse('donors:alert_feed')).json()

    assert data['donor']['name'] == 'Asha'
    assert [card['id'] for card in data['alerts']] == ['r2']
    assert data['alerts'][0]['blood_group'] == 'O-'


def test_empty_store(client):
    data = client.get(reverse('donors:alert_feed')).json()

    assert data['count'] == 0
    assert data['has_alerts'] is False


def test_accept_then_refresh(client, shared_store):
    response = client.post(reverse('donors:accept_request', args=['r1']))

    assert response.status_code == 200
    data = response.json()
    assert data['message'] == ACCEPT_MESSAGE
    assert data['alerts'][0]['state'] == 'accepted'
    assert shared_store.read(REQUESTS_KEY)[0]['acceptedDonors'] == ['D-101']

    # A second accept does not add the donor twice
    client.post(reverse('donors:accept_request', args=['r1']))
    assert shared_store.read(REQUESTS_KEY)[0]['acceptedDonors'] == ['D-101']


def test_malformed_urgency_does_not_take_feed_down(client, stored_requests):
    stored_requests[1]['urgency'] = 1.5
    stored_requests[1]['bloodGroup'] = 'A+'
    stored_requests[1]['hospitalLat'] = 12.966
    stored_requests[1]['hospitalLon'] = 77.652
    CacheStore().write(REQUESTS_KEY, stored_requests)

    feed = client.get(reverse('donors:alert_feed'))
    assert feed.status_code == 200
    assert [alert['id'] for alert in feed.json()['alerts']] == ['r1', 'r2']
    assert feed.json()['alerts'][1]['urgency_hours'] is None

    response = client.post(reverse('donors:accept_request', args=['r1']))
    assert response.status_code == 200
    stored = CacheStore().read(REQUESTS_KEY)
    assert stored[0]['acceptedDonors'] == ['D-101']
    assert stored[1]['urgency'] == 1.5


def test_accept_unknown_request(client, shared_store, stored_requests):
    response = client.post(reverse('donors:accept_request', args=['gone']))

    assert response.status_code == 404
    assert shared_store.read(REQUESTS_KEY) == stored_requests


def test_accept_cannot_target_request_without_id(client):
    collection = [{'hospitalName': 'X', 'bloodGroup': 'B-'}]
    CacheStore().write(REQUESTS_KEY, collection)

    response = client.post(reverse('donors:accept_request', args=['None']))

    assert response.status_code == 404
    assert CacheStore().read(REQUESTS_KEY) == collection


def test_accept_requires_post(client, shared_store):
    response = client.get(reverse('donors:accept_request', args=['r1']))
    assert response.status_code == 405


def test_toggle_availability(client, shared_store):
    url = reverse('donors:toggle_availability')

    assert client.post(url).json() == {'status': 'offline'}
    assert client.get(reverse('donors:alert_feed')).json() == {'status': 'offline'}

    assert client.post(url).json() == {'status': 'available'}
    assert client.get(reverse('donors:alert_feed')).json()['count'] == 1


def test_corrupt_store_is_503(client):
    CacheStore().write(REQUESTS_KEY, 'not a list')

    response = client.get(reverse('donors:alert_feed'))

    assert response.status_code == 503


def test_corrupt_session_is_503(client, shared_store):
    set_session(client, SESSION_KEY, {'id': 'D-7'})

    response = client.get(reverse('donors:alert_feed'))

    assert response.status_code == 503


def test_logout_forgets_session_donor(client, shared_store):
    set_session(client, SESSION_KEY, {
        'id': 'D-7', 'name': 'Asha', 'bloodGroup': 'O-', 'lat': 40.01, 'lng': 40.0,
    })

    assert client.post(reverse('donors:logout')).status_code == 200

    data = client.get(reverse('donors:alert_feed')).json()
    assert data['donor']['id'] == 'D-101'
