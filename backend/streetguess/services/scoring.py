from math import radians, degrees, sin, cos, sqrt, atan2, exp, floor, isnan
from typing import Optional

from ..errors import InvalidInput
from ..models.game import GeoPoint


EARTH_RADIUS_KM = 6371.0

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def validate_point(point: GeoPoint) -> GeoPoint:
    """Reject coordinates outside [-90, 90] / [-180, 180] (NaN included)."""
    lat, lon = point.lat, point.lon
    if isnan(lat) or isnan(lon) or not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise InvalidInput(f"Coordinate out of range: lat={lat}, lon={lon}")
    return point


def haversine_distance(a: GeoPoint, b: GeoPoint) -> int:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        a, b: Points in decimal degrees

    Returns:
        Distance in whole kilometers (rounded half up)

    Raises:
        InvalidInput: if either point is out of range
    """
    validate_point(a)
    validate_point(b)

    # Convert coordinates to radians
    lat1_rad = radians(a.lat)
    lon1_rad = radians(a.lon)
    lat2_rad = radians(b.lat)
    lon2_rad = radians(b.lon)

    # Haversine formula
    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    h = sin(dlat / 2)**2 + cos(lat1_rad) * cos(lat2_rad) * sin(dlon / 2)**2
    h = min(1.0, h)
    c = 2 * atan2(sqrt(h), sqrt(1 - h))

    return _round_half_up(EARTH_RADIUS_KM * c)


def calculate_score(distance_km: float, max_points: int = 5000, decay_km: float = 2000.0) -> int:
    """
    Calculate score based on distance from actual location.

    The score decays exponentially: max_points * exp(-distance / decay_km).
    A perfect guess earns max_points; far guesses approach 0 and never go
    below it.

    Args:
        distance_km: Distance in kilometers
        max_points: Maximum possible points
        decay_km: Distance over which the score falls by a factor of e

    Returns:
        Score (0 to max_points)
    """
    if isnan(distance_km) or distance_km < 0:
        raise InvalidInput(f"Distance must be non-negative, got {distance_km}")
    score = _round_half_up(max(0.0, max_points * exp(-distance_km / decay_km)))
    return min(max_points, max(0, score))


def initial_bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Forward azimuth from a towards b, in degrees [0, 360)."""
    validate_point(a)
    validate_point(b)
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlon = radians(b.lon - a.lon)

    x = sin(dlon) * cos(lat2)
    y = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    return (degrees(atan2(x, y)) + 360.0) % 360.0


def compass_direction(bearing: float) -> str:
    """Map a bearing in degrees onto one of 8 compass points."""
    return COMPASS_POINTS[int(((bearing % 360.0) + 22.5) // 45) % 8]


def rate_distance(distance_km: Optional[float]) -> str:
    """
    Label a guess by distance band.

    - < 0.1km: perfect
    - < 1km: excellent
    - < 10km: very_good
    - < 50km: good
    - < 100km: okay
    - < 500km: not_great
    - < 1000km: poor
    - otherwise: very_poor
    """
    if distance_km is None:
        return "no_guess"
    if distance_km < 0.1:  # < 100m - Perfect!
        return "perfect"
    elif distance_km < 1:
        return "excellent"
    elif distance_km < 10:
        return "very_good"
    elif distance_km < 50:
        return "good"
    elif distance_km < 100:
        return "okay"
    elif distance_km < 500:
        return "not_great"
    elif distance_km < 1000:
        return "poor"
    else:
        return "very_poor"
