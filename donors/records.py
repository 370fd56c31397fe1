# donors/records.py
"""
In-memory records used by the alert engine.

These are the canonical shapes produced by donors.serializers once a stored
record has been normalized. Business logic never sees the stored field names.
"""


class DonorProfile:
    """Donor viewing the alert feed. Immutable for the session."""

    def __init__(self, id, name, blood_group, lat, lng):
        self.id = id
        self.name = name
        self.blood_group = blood_group
        self.lat = lat
        self.lng = lng

    @property
    def initial(self):
        return self.name[:1]

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'bloodGroup': self.blood_group,
            'lat': self.lat,
            'lng': self.lng,
        }

    def __repr__(self):
        return f'<DonorProfile {self.id} ({self.blood_group})>'


class DonationRequest:
    """A hospital's open need for blood, as seen by the donor side."""

    def __init__(self, id, hospital_name='', hospital_lat=None, hospital_lon=None,
                 blood_group='', urgency=None, component='', accepted_donors=None):
        self.id = id
        self.hospital_name = hospital_name
        self.hospital_lat = hospital_lat
        self.hospital_lon = hospital_lon
        self.blood_group = blood_group
        self.urgency = urgency
        self.component = component
        self.accepted_donors = list(accepted_donors or [])

    def has_accepted(self, donor_id):
        return donor_id in self.accepted_donors

    def __repr__(self):
        return f'<DonationRequest {self.id} ({self.blood_group or "?"})>'


class Alert:
    """
    A request that is visible to one donor, annotated with the
    donor-relative distance and whether that donor already accepted it.
    """

    def __init__(self, request, distance_km, accepted=False):
        self.request = request
        self.distance_km = distance_km
        self.accepted = accepted

    @property
    def request_id(self):
        return self.request.id

    def __repr__(self):
        state = 'accepted' if self.accepted else 'incoming'
        return f'<Alert {self.request.id} {self.distance_km:.1f}km {state}>'
