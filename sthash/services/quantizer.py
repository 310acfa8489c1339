import math
from decimal import Decimal, ROUND_DOWN
from typing import List, NamedTuple

from sthash.core.errors import InvalidArgument

class QuantizedPoint(NamedTuple):
    lat: float
    lng: float
    lat_step: float
    lng_step: float


def quantify_duration(begin: float, end: float, time_step_minutes: float) -> List[float]:
    """
    Discretize [begin, end] onto timestamps aligned to the time step.

    The first timestamp is the largest multiple of the step <= begin, the last
    one the smallest multiple >= end. With a 5 minute step:

           begin                               end
        1581378989                         1581379321
             | floor                            | ceil
             v                                  v
        1581378900        1581379200       1581379500
                               ^
                               | newly added point

    Args:
        begin: Start of the interval, Unix seconds.
        end: End of the interval, Unix seconds.
        time_step_minutes: Step size in minutes.

    Returns:
        Strictly increasing timestamps (seconds) with a constant stride.
    """
    if not math.isfinite(time_step_minutes) or time_step_minutes <= 0:
        raise InvalidArgument(f"time_step_minutes must be a positive number, got {time_step_minutes!r}")
    if not (math.isfinite(begin) and math.isfinite(end)):
        raise InvalidArgument("begin and end must be finite timestamps")
    if begin > end:
        raise InvalidArgument(f"begin ({begin}) is after end ({end})")

    step = time_step_minutes * 60
    first = math.floor(begin / step) * step
    last = math.ceil(end / step) * step

    timestamps = []
    t = first
    while t <= last:
        timestamps.append(t)
        t += step
    return timestamps


def _truncate(value: float, precision: int) -> float:
    # Zero every decimal digit finer than 10**precision, toward zero.
    exact = Decimal(repr(value))
    if exact.as_tuple().exponent >= precision:
        return float(exact)
    return float(exact.quantize(Decimal(1).scaleb(precision), rounding=ROUND_DOWN))


def quantify_latlng(lat: float, lng: float, latlng_precision: int) -> QuantizedPoint:
    """
    Truncate a lat/lng pair onto a decimal grid.

    For example with precision -3 (~100 meters), 25.123456, 122.123456 becomes
    25.123, 122.123 with a 0.001 step on both axes. The step does not depend on
    the latitude, so cells shrink in the east-west direction towards the poles.
    """
    if isinstance(latlng_precision, bool) or not isinstance(latlng_precision, int):
        raise InvalidArgument(f"latlng_precision must be an integer, got {latlng_precision!r}")
    lat = float(lat)
    lng = float(lng)
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidArgument(f"lat/lng must be finite, got ({lat}, {lng})")

    lat_step = 10 ** latlng_precision
    lng_step = 10 ** latlng_precision

    return QuantizedPoint(
        _truncate(lat, latlng_precision),
        _truncate(lng, latlng_precision),
        lat_step,
        lng_step,
    )
