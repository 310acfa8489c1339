# Location history timelines -> spacetime records
#
# A timeline document looks like:
#
#   {
#     "timelineObjects": [
#       {
#         "placeVisit": {
#           "location": {"latitudeE7": 374604590, "longitudeE7": 1264406800, "name": "..."},
#           "duration": {"startTimestampMs": "1579478400000", "endTimestampMs": "1579564800000"}
#         }
#       },
#       {"activitySegment": {...}}
#     ]
#   }
#
# Only placeVisit entries carry a single location, so everything else is skipped.

from typing import Any, Dict, Iterable, List, Mapping, Union

import structlog

from sthash.core.errors import InvalidArgument
from sthash.models.dto import SpacetimeRecord

logger = structlog.get_logger(__name__)

E7 = 10_000_000

def record_from_place_visit(obj: Mapping[str, Any]) -> SpacetimeRecord:
    """
    Convert one placeVisit (wrapped or bare) into a SpacetimeRecord.

    Coordinates are stored as integer degrees * 1e7 and timestamps as
    milliseconds, either numbers or numeric strings.
    """
    visit = obj.get("placeVisit", obj)
    try:
        location = visit["location"]
        duration = visit["duration"]
        lat = int(location["latitudeE7"]) / E7
        lng = int(location["longitudeE7"]) / E7
        begin = float(duration["startTimestampMs"]) / 1000
        end = float(duration["endTimestampMs"]) / 1000
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidArgument(f"Malformed placeVisit entry: {e}") from e

    return SpacetimeRecord.build(begin=begin, end=end, lat=lat, lng=lng)


def records_from_timeline(
    document: Union[Mapping[str, Any], Iterable[Dict[str, Any]]],
) -> List[SpacetimeRecord]:
    """Extract every placeVisit from a timeline document or a bare list of timeline objects."""
    if isinstance(document, Mapping):
        if "timelineObjects" not in document:
            raise InvalidArgument("Timeline document has no 'timelineObjects'")
        objects = document["timelineObjects"]
    else:
        objects = document

    records = []
    skipped = 0
    for obj in objects:
        if not isinstance(obj, Mapping) or "placeVisit" not in obj:
            skipped += 1
            continue
        records.append(record_from_place_visit(obj))

    if skipped:
        logger.info("timeline_objects_skipped", skipped=skipped, kept=len(records))
    return records
