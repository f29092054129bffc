# geo.py
# Great-circle destination points and the 9-point search ring.

import math
from typing import List

from wikipoi.models import Coordinate

EARTH_RADIUS_KM = 6371.0

# N, NW, W, SW, S, SE, E, NE
RING_BEARINGS = (0, -45, -90, -135, 180, 135, 90, 45)


def destination(center: Coordinate, bearing: float, distance_km: float) -> Coordinate:
    """
    Point reached from `center` after `distance_km` along initial `bearing`
    (degrees clockwise from north, negative values allowed) on a sphere.
    """
    lat1 = math.radians(center.latitude)
    lon1 = math.radians(center.longitude)
    theta = math.radians(bearing)
    delta = distance_km / EARTH_RADIUS_KM

    # rounding near the poles can push the sine just past 1
    sin_lat2 = (math.sin(lat1) * math.cos(delta) +
                math.cos(lat1) * math.sin(delta) * math.cos(theta))
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + math.atan2(math.sin(theta) * math.sin(delta) * math.cos(lat1),
                             math.cos(delta) - math.sin(lat1) * math.sin(lat2))

    return Coordinate(latitude=math.degrees(lat2), longitude=math.degrees(lon2))


def ring(center: Coordinate, radius_km: float) -> List[Coordinate]:
    """Center followed by one satellite per compass bearing at `radius_km`."""
    return [center] + [destination(center, b, radius_km) for b in RING_BEARINGS]


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))
