from donors.feed import ACCEPTED, INCOMING, build_feed
from donors.records import Alert, DonationRequest


def test_incoming_card(donor):
    blood_request = DonationRequest(
        'r1', hospital_name='Apollo', blood_group='A+', urgency=4, component='Platelets',
    )

    feed = build_feed([Alert(blood_request, 3.456)], donor)

    assert feed['count'] == 1
    assert feed['has_alerts'] is True
    assert feed['alerts'] == [{
        'id': 'r1',
        'state': INCOMING,
        'hospital_name': 'Apollo',
        'distance_km': 3.5,
        'urgency_hours': 4,
        'component': 'Platelets',
        'blood_group': 'A+',
    }]


def test_accepted_card_has_instructions(donor):
    blood_request = DonationRequest('r1', blood_group='B+', accepted_donors=['D-101'])

    card = build_feed([Alert(blood_request, 0.1, accepted=True)], donor)['alerts'][0]

    assert card['state'] == ACCEPTED
    assert 'D-101' in card['instructions']


def test_default_hospital_name(donor, settings):
    settings.LIFELINK_DEFAULT_HOSPITAL_NAME = 'City Hospital'
    blood_request = DonationRequest('r1', blood_group='A+')

    card = build_feed([Alert(blood_request, 1.0)], donor)['alerts'][0]

    assert card['hospital_name'] == 'City Hospital'


def test_empty_feed(donor):
    feed = build_feed([], donor)

    assert feed['count'] == 0
    assert feed['has_alerts'] is False
    assert feed['alerts'] == []
    assert feed['donor'] == {
        'id': 'D-101',
        'name': 'Rahul Sharma',
        'blood_group': 'A+',
        'initial': 'R',
    }
