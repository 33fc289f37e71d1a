"""Spherical geometry for radius lookups.

Distances on the API are kilometres; the sphere filter works in radians of
arc on a sphere of Earth's equatorial radius.
"""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6378


def radius_for_distance(distance_km: float) -> float:
    """Convert a surface distance to an angular radius."""
    return distance_km / EARTH_RADIUS_KM


def angular_distance(lng1: float, lat1: float, lng2: float, lat2: float) -> float:
    """Great-circle angle in radians between two points (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(a)))


@dataclass(frozen=True)
class CenterSphere:
    """Every point within ``radius`` radians of arc from (longitude, latitude)."""

    longitude: float
    latitude: float
    radius: float

    def contains(self, longitude: float, latitude: float) -> bool:
        return angular_distance(self.longitude, self.latitude, longitude, latitude) <= self.radius

    def bounding_box(self) -> "BoundingBox":
        """Smallest lat/lng rectangle enclosing the cap.

        Falls back to the full longitude range when the cap reaches a pole or
        crosses the antimeridian.
        """
        d_lat = math.degrees(self.radius)
        min_lat, max_lat = self.latitude - d_lat, self.latitude + d_lat
        if min_lat <= -90 or max_lat >= 90:
            return BoundingBox(max(min_lat, -90.0), min(max_lat, 90.0), -180.0, 180.0)

        ratio = math.sin(self.radius) / math.cos(math.radians(self.latitude))
        if ratio >= 1:
            return BoundingBox(min_lat, max_lat, -180.0, 180.0)
        d_lng = math.degrees(math.asin(ratio))
        min_lng, max_lng = self.longitude - d_lng, self.longitude + d_lng
        if min_lng < -180 or max_lng > 180:
            return BoundingBox(min_lat, max_lat, -180.0, 180.0)
        return BoundingBox(min_lat, max_lat, min_lng, max_lng)


@dataclass(frozen=True)
class BoundingBox:
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float
