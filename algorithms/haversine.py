"""
Haversine Algorithm - Calculate distance between two geographical points
Used to measure how far a donor is from the hospital posting a request
"""

import math

# Radius of earth in kilometers
EARTH_RADIUS_KM = 6371


def distance_km(origin_lat, origin_lng, dest_lat, dest_lng):
    """
    Calculate straight-line distance between two points.
    Note: This is "as the crow flies" distance, not road distance.

    Inputs are not range-checked; NaN propagates through the math.

    Args:
        origin_lat, origin_lng: Latitude and longitude of point 1 (donor)
        dest_lat, dest_lng: Latitude and longitude of point 2 (hospital)

    Returns:
        Distance in kilometers
    """
    d_lat = math.radians(dest_lat - origin_lat)
    d_lon = math.radians(dest_lng - origin_lng)

    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(math.radians(origin_lat)) * math.cos(math.radians(dest_lat))
        * math.sin(d_lon / 2) * math.sin(d_lon / 2)
    )

    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
