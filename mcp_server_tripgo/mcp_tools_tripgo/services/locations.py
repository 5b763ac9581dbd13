from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.schemas import (
    FormattedLocation,
    LocationCounts,
    LocationGroup,
    LocationGroupSummary,
    LocationsQuery,
    LocationsResponse,
    LocationsResult,
    StopLocation,
)
from ..utils.geo import format_degrees
from .client import TripGoClient

DEFAULT_LIMIT = 10

# (LocationGroup attribute, discriminator), in output order
_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("stops", "stop"),
    ("bike_pods", "bikePod"),
    ("car_parks", "carPark"),
    ("car_pods", "carPod"),
    ("car_rentals", "carRental"),
    ("free_floating", "freeFloating"),
)


def _format_location(location: StopLocation, kind: str) -> FormattedLocation:
    # Stops list their services; every other category has a street address.
    if kind == "stop":
        return FormattedLocation(
            lat=location.lat,
            lng=location.lng,
            name=location.name or "",
            type=kind,
            code=location.code,
            region=location.region,
            services=location.services,
        )
    return FormattedLocation(
        lat=location.lat,
        lng=location.lng,
        name=location.name or "",
        address=location.address or "",
        type=kind,
        code=location.code,
        region=location.region,
    )


def flatten_locations(groups: Sequence[LocationGroup]) -> List[FormattedLocation]:
    """Group by group, category by category, upstream order within a category."""
    flat: List[FormattedLocation] = []
    for group in groups:
        for attr, kind in _CATEGORIES:
            for location in getattr(group, attr) or []:
                flat.append(_format_location(location, kind))
    return flat


def summarize_group(group: LocationGroup) -> LocationGroupSummary:
    counts = LocationCounts(**{attr: len(getattr(group, attr) or []) for attr, _ in _CATEGORIES})
    return LocationGroupSummary(key=group.key, hash_code=group.hash_code, location_counts=counts)


def search_locations(
    client: TripGoClient,
    lat: float,
    lng: float,
    radius: Optional[float] = None,
    modes: Optional[Sequence[str]] = None,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> LocationsResult:
    """Search stops, bike/car share pods, car parks etc. around a point."""
    params: List[Tuple[str, str]] = [("lat", format_degrees(lat)), ("lng", format_degrees(lng))]
    if radius:
        params.append(("radius", str(radius)))
    if modes:
        params.append(("modes", ",".join(modes)))
    if limit:
        params.append(("limit", str(limit)))

    data = client.get("locations.json", params, context="Locations search")
    groups = LocationsResponse.model_validate(data).groups or []

    locations = flatten_locations(groups)
    return LocationsResult(
        locations=locations,
        groups=[summarize_group(g) for g in groups],
        total_locations=len(locations),
        query=LocationsQuery(
            lat=lat,
            lng=lng,
            radius=radius,
            modes=list(modes) if modes else None,
            limit=limit,
        ),
    )
