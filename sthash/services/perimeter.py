from typing import List, Tuple

from sthash.core.errors import InvalidArgument

def enumerate_perimeter(
    q_lat: float,
    q_lng: float,
    lat_step: float,
    lng_step: float,
    spread_out: int,
) -> List[Tuple[float, float]]:
    """
    List the grid points on the edge of an empty square around a quantized center.

                 -spread_out  ...  +spread_out
        -spread_out  +-----------------+
              :      |                 |
              :      |      center     |
              :      |                 |
        +spread_out  +-----------------+

    Two empty squares one cell apart share part of an edge, which is what lets
    nearby records end up with a common token.

    Points are emitted as bottom/top pairs along each column first, then
    left/right pairs along each row from the top down, corners only once.
    That gives 8 * spread_out points for spread_out >= 1. For spread_out == 0
    the first loop still runs once and the center comes out twice; existing
    token sets depend on that, so it is kept.
    """
    if isinstance(spread_out, bool) or not isinstance(spread_out, int):
        raise InvalidArgument(f"spread_out must be an integer, got {spread_out!r}")
    if spread_out < 0:
        raise InvalidArgument(f"spread_out must be >= 0, got {spread_out}")

    points = []

    # top and bottom lines
    for lng_i in range(-spread_out, spread_out + 1):
        points.append((q_lat - spread_out * lat_step, q_lng + lng_i * lng_step))
        points.append((q_lat + spread_out * lat_step, q_lng + lng_i * lng_step))

    # left and right lines, without the corners
    for lat_i in range(spread_out - 1, -spread_out, -1):
        points.append((q_lat + lat_i * lat_step, q_lng - spread_out * lng_step))
        points.append((q_lat + lat_i * lat_step, q_lng + spread_out * lng_step))

    return points
