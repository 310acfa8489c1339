# Great-circle distances, used to express grid cells in meters.
#
#   haversine_meters( 0,  0,  0.00001,  0.00001) = 1.57 meters
#   haversine_meters(45, 45, 45.00001, 45.00001) = 1.36 meters

from math import radians, sin, cos, sqrt, asin
from typing import Tuple

# Earth's radius in meters
R = 6_371_000.0

def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points
    on the Earth (specified in decimal degrees) using the Haversine formula.

    Returns:
        Distance between the two points in meters.
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlon = lon2 - lon1
    dlat = lat2 - lat1

    a = sin(dlat / 2)**2 + cos(lat1) * cos(lat2) * sin(dlon / 2)**2
    c = 2 * asin(sqrt(a))

    return R * c

def cell_size_meters(lat: float, lat_step: float, lng_step: float) -> Tuple[float, float]:
    """
    Physical (north-south, east-west) size of one grid cell at a latitude.

    Steps are in degrees and do not depend on the latitude, so the east-west
    size shrinks towards the poles.
    """
    north_south = haversine_meters(lat, 0.0, lat + lat_step, 0.0)
    east_west = haversine_meters(lat, 0.0, lat, lng_step)
    return north_south, east_west
