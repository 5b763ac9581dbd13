from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..core.schemas import (
    DeparturesQuery,
    DeparturesResponse,
    DeparturesResult,
    FormattedDeparture,
    RealtimeVehicle,
    ServiceInfo,
    ServiceSummary,
    StopLocation,
    VehicleSummary,
)
from ..utils.timezones import format_epoch, to_epoch_seconds
from .client import TripGoClient
from .regions import DEFAULT_TIMEZONE

DEFAULT_LIMIT = 10
REAL_TIME_STATUS = "IS_REAL_TIME"


def _stop_index(stops: Optional[Sequence[StopLocation]]) -> Dict[str, StopLocation]:
    index: Dict[str, StopLocation] = {}
    for stop in stops or []:
        if stop.code is not None:
            index.setdefault(stop.code, stop)
    return index


def _format_vehicle(vehicle: RealtimeVehicle, zone_name: str) -> VehicleSummary:
    return VehicleSummary(
        id=vehicle.id,
        label=vehicle.label,
        last_update=format_epoch(vehicle.last_update, zone_name) if vehicle.last_update is not None else None,
        location=vehicle.location,
        occupancy=vehicle.occupancy,
        wifi=vehicle.wifi,
    )


def format_departure(
    stop_code: str,
    stop: Optional[StopLocation],
    service: ServiceInfo,
) -> FormattedDeparture:
    zone_name = (stop.timezone if stop else None) or DEFAULT_TIMEZONE
    return FormattedDeparture(
        stop_code=stop_code,
        stop_name=stop.name if stop else None,
        scheduled_departure=format_epoch(service.start_time, zone_name),
        real_time_departure=(
            format_epoch(service.real_time_departure, zone_name)
            if service.real_time_departure is not None
            else None
        ),
        real_time=service.real_time_status == REAL_TIME_STATUS,
        service=ServiceSummary(
            id=service.service_trip_id,
            name=service.service_name,
            number=service.service_number,
            direction=service.service_direction,
            operator=service.operator,
            mode=service.mode,
        ),
        wheelchair_accessible=service.wheelchair_accessible,
        vehicle=_format_vehicle(service.realtime_vehicle, zone_name) if service.realtime_vehicle else None,
    )


def flatten_departures(response: DeparturesResponse) -> List[FormattedDeparture]:
    """One entry per service, stop by stop, in upstream order."""
    stops = _stop_index(response.stops)
    departures: List[FormattedDeparture] = []
    for embarkation in response.embarkation_stops or []:
        stop = stops.get(embarkation.stop_code)
        for service in embarkation.services or []:
            departures.append(format_departure(embarkation.stop_code, stop, service))
    return departures


def get_departures(
    client: TripGoClient,
    region: str,
    stop_codes: Sequence[str],
    time_stamp: Optional[str] = None,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> DeparturesResult:
    """Upcoming departures (with realtime data where available) for stops in one region.

    A naive `time_stamp` is read as UTC: the stop timezones are only known
    once the response is back.
    """
    body: Dict[str, object] = {
        "region": region,
        "embarkationStops": list(stop_codes),
    }
    if time_stamp:
        body["timeStamp"] = to_epoch_seconds(time_stamp, DEFAULT_TIMEZONE)
    body["limit"] = limit or DEFAULT_LIMIT

    data = client.post("departures.json", body, context="Departures search")
    response = DeparturesResponse.model_validate(data)

    return DeparturesResult(
        departures=flatten_departures(response),
        query=DeparturesQuery(region=region, stop_codes=list(stop_codes)),
    )
