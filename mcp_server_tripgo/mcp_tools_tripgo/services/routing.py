"""Trip planning via TripGo ``routing.json``.

Pipeline for one request:
1) resolve the origin's region to learn the local timezone (UTC if none),
2) turn the optional departure/arrival time into a TripGo time constraint,
3) call the routing endpoint,
4) rank and flatten the returned trip groups into a compact trip list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..core.cache import FileCache
from ..core.schemas import (
    Coordinates,
    FormattedSegment,
    FormattedTrip,
    RoutingQuery,
    RoutingResponse,
    RoutingResult,
    SegmentReference,
    SegmentTemplate,
    Trip,
)
from ..utils.geo import format_degrees
from ..utils.timezones import format_epoch, to_epoch_seconds
from .client import TripGoClient
from .regions import DEFAULT_TIMEZONE, region_for_coordinate

logger = logging.getLogger(__name__)

ROUTING_API_VERSION = "11"
DEFAULT_LIMIT = 3
TRIPS_PER_GROUP = 2
UNKNOWN_MODE = "Unknown Mode"


# ---------------------------------------------------------------------------
# Time constraint
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DepartAfter:
    epoch_seconds: int

    def as_param(self) -> Tuple[str, str]:
        return "departAfter", str(self.epoch_seconds)


@dataclass(frozen=True)
class ArriveBefore:
    epoch_seconds: int

    def as_param(self) -> Tuple[str, str]:
        return "arriveBefore", str(self.epoch_seconds)


@dataclass(frozen=True)
class Unspecified:
    def as_param(self) -> None:
        return None


TimeConstraint = Union[DepartAfter, ArriveBefore, Unspecified]


def time_constraint(
    departure_time: Optional[str],
    arrival_time: Optional[str],
    zone_name: str,
) -> TimeConstraint:
    """Departure time wins over arrival time; naive strings are local to `zone_name`."""
    if departure_time:
        return DepartAfter(to_epoch_seconds(departure_time, zone_name))
    if arrival_time:
        return ArriveBefore(to_epoch_seconds(arrival_time, zone_name))
    return Unspecified()


def _point(coordinates: Coordinates) -> str:
    return f"({format_degrees(coordinates.lat)},{format_degrees(coordinates.lng)})"


def build_routing_params(
    origin: Coordinates,
    destination: Coordinates,
    when: TimeConstraint,
    modes: Optional[Sequence[str]] = None,
    max_walking_minutes: Optional[int] = None,
    wheelchair: Optional[bool] = None,
) -> List[Tuple[str, str]]:
    params: List[Tuple[str, str]] = [
        ("from", _point(origin)),
        ("to", _point(destination)),
    ]

    time_param = when.as_param()
    if time_param:
        params.append(time_param)

    if modes:
        params.extend(("modes", mode) for mode in modes)
        params.append(("allModes", "1"))

    params.append(("v", ROUTING_API_VERSION))

    if max_walking_minutes:
        params.append(("wm", str(max_walking_minutes)))

    if wheelchair is not None:
        params.append(("wheelchair", "1" if wheelchair else "0"))

    return params


# ---------------------------------------------------------------------------
# Response shaping
# ---------------------------------------------------------------------------


def _minutes_between(start: int, end: int) -> int:
    return int((end - start) / 60)


def _template_index(templates: Optional[Sequence[SegmentTemplate]]) -> Dict[int, SegmentTemplate]:
    index: Dict[int, SegmentTemplate] = {}
    for template in templates or []:
        index.setdefault(template.hash_code, template)
    return index


def select_trips(response: RoutingResponse, limit: int = DEFAULT_LIMIT) -> List[Trip]:
    """Best two trips of each group, best `limit` groups, flattened in rank order.

    Lower weighted score is better. Groups are ranked by their best trip; both
    sorts are stable so ties keep upstream order. Limits below 1 keep one group.
    """
    ranked: List[Tuple[float, List[Trip]]] = []
    for idx, group in enumerate(response.groups or []):
        if not group.trips:
            logger.warning("Skipping empty trip group #%d in routing response", idx)
            continue
        trips = sorted(group.trips, key=lambda t: t.weighted_score)
        ranked.append((trips[0].weighted_score, trips[:TRIPS_PER_GROUP]))

    ranked.sort(key=lambda entry: entry[0])
    return [trip for _, trips in ranked[:max(1, int(limit))] for trip in trips]


def format_segment(segment: SegmentReference, templates: Dict[int, SegmentTemplate]) -> FormattedSegment:
    template = templates.get(segment.segment_template_hash_code)
    if template is None:
        return FormattedSegment(
            mode=UNKNOWN_MODE,
            duration=_minutes_between(segment.start_time, segment.end_time),
            service_name=segment.service_name,
            service_number=segment.service_number,
        )

    mode = template.mode_info.alt if template.mode_info and template.mode_info.alt else UNKNOWN_MODE
    return FormattedSegment(
        mode=mode,
        duration=_minutes_between(segment.start_time, segment.end_time),
        action=template.action,
        service_name=segment.service_name,
        service_number=segment.service_number,
        from_=template.from_.address if template.from_ else None,
        to=template.to.address if template.to else None,
    )


def format_trip(trip: Trip, templates: Dict[int, SegmentTemplate], zone_name: str) -> FormattedTrip:
    return FormattedTrip(
        id=trip.id,
        depart=format_epoch(trip.depart, zone_name),
        arrive=format_epoch(trip.arrive, zone_name),
        total_duration=_minutes_between(trip.depart, trip.arrive),
        segments=[format_segment(s, templates) for s in trip.segments],
        cost=trip.money_cost,
        currency=trip.currency_symbol,
        calories_cost=trip.calories_cost,
        carbon_cost=trip.carbon_cost,
        score=trip.weighted_score,
        url=trip.save_url,
    )


def format_trips(
    response: RoutingResponse,
    limit: int = DEFAULT_LIMIT,
    zone_name: str = DEFAULT_TIMEZONE,
) -> List[FormattedTrip]:
    templates = _template_index(response.segment_templates)
    return [format_trip(trip, templates, zone_name) for trip in select_trips(response, limit)]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def plan_trip(
    client: TripGoClient,
    origin: Coordinates,
    destination: Coordinates,
    departure_time: Optional[str] = None,
    arrival_time: Optional[str] = None,
    modes: Optional[Sequence[str]] = None,
    max_walking_minutes: Optional[int] = None,
    wheelchair: Optional[bool] = None,
    limit: int = DEFAULT_LIMIT,
    cache: Optional[FileCache] = None,
) -> RoutingResult:
    """Plan a trip between two coordinates and return the best few options.

    Args:
        client: TripGo API client.
        origin/destination: Trip endpoints.
        departure_time: ISO datetime to leave after. Naive strings are read in
            the origin region's timezone. Takes priority over arrival_time.
        arrival_time: ISO datetime to arrive before.
        modes: TripGo mode identifiers (see RoutingMode).
        max_walking_minutes: Upper bound on walking per trip.
        wheelchair: Request wheelchair-accessible trips.
        limit: Number of trip groups to keep (each contributes up to two trips).
        cache: Optional cache for the region list.
    """
    region = region_for_coordinate(client, origin, cache=cache)
    zone_name = region.timezone if region else DEFAULT_TIMEZONE

    when = time_constraint(departure_time, arrival_time, zone_name)
    params = build_routing_params(origin, destination, when, modes, max_walking_minutes, wheelchair)

    data = client.get("routing.json", params, context="Routing")
    response = RoutingResponse.model_validate(data)

    trips = format_trips(response, limit=limit, zone_name=zone_name)
    logger.info("Routing returned %d group(s); kept %d trip(s)", len(response.groups or []), len(trips))

    return RoutingResult(
        trips=trips,
        query=RoutingQuery(
            from_=origin,
            to=destination,
            url=client.url_for("routing.json", params),
            timezone=zone_name,
            region=region.name if region else None,
        ),
    )
