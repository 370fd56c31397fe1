import copy
import logging

from django.conf import settings

from algorithms.eligibility import filter_visible
from donors.serializers import normalize_profile, normalize_requests
from donors.store import load_requests, save_requests

# Logger setup
logger = logging.getLogger(__name__)


def resolve_profile(store, default, key=None):
    """
    Resolve the donor viewing the dashboard.

    Reads the session payload from the store; when there is none the
    given default profile (a stored-form dict) is used instead.
    """
    key = key or settings.LIFELINK_SESSION_KEY
    raw = store.read(key)
    if not raw:
        logger.info(f"No donor session under '{key}', using default profile {default.get('id')}")
        return normalize_profile(default, key='default profile')
    return normalize_profile(raw, key=key)


def find_request(all_requests, request_id):
    """Return the stored record with this id, or None. Records without an id never match."""
    if request_id in (None, ''):
        return None
    for record in all_requests:
        if record.get('id') in (None, ''):
            continue
        if str(record.get('id')) == str(request_id):
            return record
    return None


def accept_request(request_id, donor_id, all_requests):
    """
    Record that a donor accepted a request.

    Works on the raw stored collection and returns a new collection with
    the donor appended to the request's acceptedDonors list. Unknown ids
    leave the collection unchanged, and accepting twice is a no-op.
    Fields other than acceptedDonors are never touched.
    """
    updated = copy.deepcopy(list(all_requests))

    record = find_request(updated, request_id)
    if record is None:
        return updated

    if not record.get('acceptedDonors'):
        record['acceptedDonors'] = []

    if donor_id not in record['acceptedDonors']:
        record['acceptedDonors'].append(donor_id)

    return updated


class AlertService:
    """
    Alert engine for one donor: reads the shared collection, filters it and
    writes accepts back.
    """

    def __init__(self, store, donor, max_distance=None, default_hospital=None, requests_key=None):
        self.store = store
        self.donor = donor
        self.max_distance = max_distance if max_distance is not None else settings.LIFELINK_MAX_DISTANCE_KM
        self.default_hospital = default_hospital or settings.LIFELINK_DEFAULT_HOSPITAL
        self.requests_key = requests_key or settings.LIFELINK_REQUESTS_KEY

    def requests(self):
        raw = load_requests(self.store, self.requests_key)
        return normalize_requests(raw, key=self.requests_key)

    def scan(self):
        """Re-read the store and return the alerts visible to this donor."""
        return filter_visible(
            self.donor,
            self.requests(),
            max_distance=self.max_distance,
            default_hospital=self.default_hospital,
        )

    def accept(self, request_id):
        """
        Accept a request and persist the whole collection.

        Returns False when the request no longer exists. Callers should
        scan() again afterwards to refresh what the donor sees.
        """
        raw = load_requests(self.store, self.requests_key)
        # Refuse to rewrite a collection we could not read back
        normalize_requests(raw, key=self.requests_key)

        if find_request(raw, request_id) is None:
            logger.warning(f"Donor {self.donor.id} tried to accept unknown request {request_id}")
            return False

        save_requests(self.store, accept_request(request_id, self.donor.id, raw), self.requests_key)
        logger.info(f"Donor {self.donor.id} accepted request {request_id}")
        return True
