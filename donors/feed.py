# donors/feed.py
"""
Alert feed - presentation data for the donor dashboard.

Builds the card data the dashboard (or the terminal poller) renders.
No markup is produced here.
"""
from django.conf import settings

ACCEPTED = 'accepted'
INCOMING = 'incoming'

ACCEPT_MESSAGE = "Thank you! The hospital has been notified of your arrival."


def build_card(alert, donor, default_hospital_name=None):
    blood_request = alert.request
    hospital_name = blood_request.hospital_name or default_hospital_name or settings.LIFELINK_DEFAULT_HOSPITAL_NAME

    card = {
        'id':             blood_request.id,
        'state':          ACCEPTED if alert.accepted else INCOMING,
        'hospital_name':  hospital_name,
        'distance_km':    round(alert.distance_km, 1),
        'urgency_hours':  blood_request.urgency,
        'component':      blood_request.component,
        'blood_group':    blood_request.blood_group,
    }

    if alert.accepted:
        card['instructions'] = (
            "Please proceed to the Emergency Ward reception. "
            f"Show your Donor ID: {donor.id}."
        )

    return card


def build_feed(alerts, donor, default_hospital_name=None):
    cards = [build_card(alert, donor, default_hospital_name) for alert in alerts]
    return {
        'donor': {
            'id':          donor.id,
            'name':        donor.name,
            'blood_group': donor.blood_group,
            'initial':     donor.initial,
        },
        'count':      len(cards),
        'has_alerts': bool(cards),
        'alerts':     cards,
    }
