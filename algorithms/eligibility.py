from algorithms.haversine import distance_km
from donors.records import Alert, DonationRequest, DonorProfile

# Constants
MAX_DISTANCE_KM = 10

# Used when a request was posted without hospital coordinates
DEFAULT_HOSPITAL_LAT = 12.9606
DEFAULT_HOSPITAL_LON = 77.6416


def request_distance(donor: DonorProfile, blood_request: DonationRequest, default_hospital=None) -> float:
    """
    Distance from the donor to the request's hospital.

    Each missing hospital coordinate is replaced by the default hospital
    location so malformed requests are still shown rather than hidden.
    """
    default_lat, default_lon = default_hospital or (DEFAULT_HOSPITAL_LAT, DEFAULT_HOSPITAL_LON)

    hospital_lat = blood_request.hospital_lat
    if hospital_lat is None:
        hospital_lat = default_lat

    hospital_lon = blood_request.hospital_lon
    if hospital_lon is None:
        hospital_lon = default_lon

    return distance_km(donor.lat, donor.lng, hospital_lat, hospital_lon)


def is_visible(donor: DonorProfile, blood_request: DonationRequest, distance: float, max_distance: float = MAX_DISTANCE_KM) -> bool:
    """
    Check if a request should appear on a donor's feed.

    Criteria:
    - Blood group matches the donor's exactly AND hospital is within max_distance km
    - OR the donor has already accepted the request (stays visible afterwards,
      even if the request is later edited)
    """
    if blood_request.has_accepted(donor.id):
        return True

    blood_match = blood_request.blood_group == donor.blood_group
    return blood_match and distance <= max_distance


def filter_visible(donor: DonorProfile, requests, max_distance: float = MAX_DISTANCE_KM, default_hospital=None) -> list:
    """
    Filter requests down to the ones this donor should see.

    Args:
        donor (DonorProfile): Donor viewing the feed
        requests: Normalized DonationRequest records, in stored order
        max_distance (float): Maximum distance in km (inclusive)
        default_hospital: (lat, lon) used for requests without coordinates

    Returns:
        List of Alert objects, in the same relative order as the input
    """
    alerts = []

    for blood_request in requests:
        distance = request_distance(donor, blood_request, default_hospital)
        if is_visible(donor, blood_request, distance, max_distance):
            alerts.append(Alert(
                blood_request,
                distance,
                accepted=blood_request.has_accepted(donor.id),
            ))

    return alerts
