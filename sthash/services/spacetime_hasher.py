"""
Spacetime hash: turn a (time interval, location) record into keyed tokens.

A record is quantized on both axes, the location is spread out to the edge of
an empty square around its grid cell, and every (timestamp, edge point) pair is
hashed. Two parties hashing with the same key and parameters can then
intersect their token lists: a common token means the records were in the same
grid cell edge at the same quantized time.

    +---+---+---+
    | x | x | x |      x: hashed point (spread_out = 1)
    +---+---+---+
    | x |   | x |      the center cell itself is not hashed
    +---+---+---+
    | x | x | x |
    +---+---+---+
"""

import math
from concurrent.futures import Executor
from typing import Iterable, List, Optional

import structlog

from sthash.core.errors import InvalidArgument
from sthash.models.dto import HashConfig, SpacetimeRecord
from sthash.services.keyed_hasher import make_hmac
from sthash.services.perimeter import enumerate_perimeter
from sthash.services.quantizer import quantify_duration, quantify_latlng

logger = structlog.get_logger(__name__)

def hash_spacetime(
    key: str,
    begin: float,
    end: float,
    lat: float,
    lng: float,
    time_step_minutes: float,
    latlng_precision: int,
    spread_out: int,
    executor: Optional[Executor] = None,
) -> List[str]:
    """
    Hash one spacetime record.

    Args:
        key: HMAC secret.
        begin: Start timestamp, seconds.
        end: End timestamp, seconds.
        lat: Latitude, degrees.
        lng: Longitude, degrees.
        time_step_minutes: Duration quantization step.
        latlng_precision: Decimal position coordinates are truncated at;
            negative means digits after the point.
        spread_out: Half-width of the empty square, in grid cells.
        executor: Optional pool to hash timestamps concurrently. The result
            order does not depend on it.

    Returns:
        Tokens ordered by timestamp, then by perimeter order.
    """
    # All validation happens here, before the first token is computed.
    keyed_hash = make_hmac(key)
    timestamps = quantify_duration(begin, end, time_step_minutes)
    q = quantify_latlng(lat, lng, latlng_precision)
    perimeter = enumerate_perimeter(q.lat, q.lng, q.lat_step, q.lng_step, spread_out)

    def hash_row(t) -> List[str]:
        return [keyed_hash(t, p_lat, p_lng) for p_lat, p_lng in perimeter]

    if executor is None:
        rows = map(hash_row, timestamps)
    else:
        rows = executor.map(hash_row, timestamps)

    tokens = [token for row in rows for token in row]

    logger.debug(
        "spacetime_hashed",
        timestamps=len(timestamps),
        perimeter_points=len(perimeter),
        tokens=len(tokens),
    )
    return tokens


def hash_record(
    record: SpacetimeRecord,
    config: HashConfig,
    executor: Optional[Executor] = None,
) -> List[str]:
    """Hash a validated record with an explicit configuration."""
    return hash_spacetime(
        config.key,
        record.begin,
        record.end,
        record.lat,
        record.lng,
        config.time_step_minutes,
        config.latlng_precision,
        config.spread_out,
        executor=executor,
    )


def hash_records(
    records: Iterable[SpacetimeRecord],
    config: HashConfig,
    executor: Optional[Executor] = None,
) -> List[List[str]]:
    """Hash several records under one configuration, one token list per record."""
    return [hash_record(record, config, executor=executor) for record in records]


def count_tokens(record: SpacetimeRecord, config: HashConfig) -> int:
    """
    Number of tokens hash_record would produce, without hashing anything.

    |times| = ceil(end / step) - floor(begin / step) + 1 and
    |perimeter| = 8 * spread_out, or 2 when spread_out is 0.
    """
    step = config.time_step_minutes * 60
    first, last = record.begin / step, record.end / step
    if not (math.isfinite(first) and math.isfinite(last)):
        raise InvalidArgument(
            f"time_step_minutes={config.time_step_minutes} is too small for the interval"
        )
    timestamps = math.ceil(last) - math.floor(first) + 1
    return timestamps * max(8 * config.spread_out, 2)


def count_tokens_for_records(records: Iterable[SpacetimeRecord], config: HashConfig) -> int:
    return sum(count_tokens(record, config) for record in records)
