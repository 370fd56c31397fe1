import math

import pytest
from django.core.cache import caches

from donors.records import DonorProfile, DonationRequest
from donors.store import MappingStore

DONOR_LAT = 12.965
DONOR_LNG = 77.65


def lat_offset(km):
    """Degrees of latitude that put a point `km` due north of the donor."""
    return math.degrees(km / 6371)


@pytest.fixture(autouse=True)
def clear_cache():
    caches['default'].clear()
    yield
    caches['default'].clear()


@pytest.fixture
def donor():
    return DonorProfile('D-101', 'Rahul Sharma', 'A+', DONOR_LAT, DONOR_LNG)


@pytest.fixture
def make_request():
    def _make(id='r1', km=1.0, blood_group='A+', **kwargs):
        kwargs.setdefault('hospital_lat', DONOR_LAT + lat_offset(km))
        kwargs.setdefault('hospital_lon', DONOR_LNG)
        return DonationRequest(id, blood_group=blood_group, **kwargs)
    return _make


@pytest.fixture
def store():
    return MappingStore()


@pytest.fixture
def stored_requests():
    return [
        {
            'id': 'r1',
            'hospitalName': 'Manipal Hospital',
            'bloodGroup': 'A+',
            'hospitalLat': 12.965,
            'hospitalLon': 77.651,
            'urgency': 2,
            'component': 'Whole Blood',
        },
        {
            'id': 'r2',
            'hospitalName': 'Distant General',
            'group': 'O-',
            'hospitalLat': 40,
            'hospitalLon': 40,
            'urgency': 6,
            'component': 'Platelets',
        },
    ]
