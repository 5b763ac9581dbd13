from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..core.cache import FileCache
from ..core.errors import UpstreamError
from ..core.schemas import Coordinates, Region, RegionsResponse
from .client import TripGoClient
from ..utils.geo import coordinate_in_encoded_polygon

logger = logging.getLogger(__name__)

# Used when a coordinate is outside every TripGo region.
DEFAULT_TIMEZONE = "UTC"


def fetch_regions(client: TripGoClient, cache: Optional[FileCache] = None) -> List[Region]:
    """Fetch the TripGo region list (name, coverage polygon, timezone)."""
    key = f"tripgo:regions:v2:{client.base_url}"
    if cache:
        cached = cache.get(key)
        if cached and "regions" in cached:
            return RegionsResponse.model_validate(cached).regions

    data = client.post("regions.json", {"v": 2}, context="Regions lookup")
    if "regions" not in data:
        raise UpstreamError("Failed to fetch regions")

    if cache:
        cache.set(key, {"regions": data["regions"]})
    return RegionsResponse.model_validate(data).regions


def resolve_region(coordinate: Coordinates, regions: Sequence[Region]) -> Optional[Region]:
    """First region (in list order) whose polygon contains the coordinate."""
    for region in regions:
        if coordinate_in_encoded_polygon(coordinate.lat, coordinate.lng, region.polygon):
            return region
    return None


def region_for_coordinate(
    client: TripGoClient,
    coordinate: Coordinates,
    cache: Optional[FileCache] = None,
) -> Optional[Region]:
    region = resolve_region(coordinate, fetch_regions(client, cache=cache))
    if region is None:
        logger.info("No TripGo region covers (%s, %s)", coordinate.lat, coordinate.lng)
    else:
        logger.info("(%s, %s) is in region %s (%s)", coordinate.lat, coordinate.lng, region.name, region.timezone)
    return region
