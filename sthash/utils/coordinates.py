# Plain lat/lng parsing for the two shapes location exports come in:
# a numeric pair, or a single "lat, lng" string.

import math
import re
from typing import Mapping, Tuple

from sthash.core.errors import InvalidArgument

_NUMBER = r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?'
# "lat,lng", "lat, lng" or "lat lng"
COORD_PATTERN = re.compile(rf'^\s*({_NUMBER})\s*(?:,\s*|\s+)({_NUMBER})\s*$')

def parse_latlng(value) -> Tuple[float, float]:
    """
    Normalize a coordinate into a (lat, lng) tuple of floats.

    Accepts:
        - a string such as "37.47700115295818, 126.96292928072465"
        - a two element list/tuple of numbers
        - a mapping with "lat" and "lng" (or "lon") keys

    Raises:
        InvalidArgument: If the value has none of these shapes, or the result
            is not a finite coordinate inside [-90, 90] x [-180, 180].
    """
    if isinstance(value, str):
        match = COORD_PATTERN.match(value)
        if not match:
            raise InvalidArgument(f"Cannot parse coordinates from {value!r}")
        lat, lng = float(match.group(1)), float(match.group(2))
    elif isinstance(value, Mapping):
        try:
            lat = float(value["lat"])
            lng = float(value["lng"] if "lng" in value else value["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidArgument(f"Cannot parse coordinates from {value!r}") from e
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            lat, lng = float(value[0]), float(value[1])
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Cannot parse coordinates from {value!r}") from e
    else:
        raise InvalidArgument(f"Unsupported coordinate value: {value!r}")

    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidArgument(f"Coordinates must be finite, got ({lat}, {lng})")
    if abs(lat) > 90 or abs(lng) > 180:
        raise InvalidArgument(f"Coordinates out of range: ({lat}, {lng})")

    return lat, lng
