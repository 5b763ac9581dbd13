from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TripGoModel(BaseModel):
    """Base for TripGo payloads: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict with wire names; absent optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Routing mode identifiers: public transit, cycling, driving, taxi, walking
RoutingMode = Literal["pt_pub", "cy_bic", "me_car", "ps_tax", "wa_wal"]


class Coordinates(TripGoModel):
    """Geographic coordinates in WGS84."""
    lat: float
    lng: float


# ---------------------------------------------------------------------------
# Upstream payloads (TripGo API v1)
# ---------------------------------------------------------------------------


class Region(TripGoModel):
    """Coverage area with its own timezone.

    `polygon` uses Google's Encoded Polyline Algorithm (precision 1e5).
    """
    name: str
    polygon: str
    timezone: str


class RegionsResponse(TripGoModel):
    regions: List[Region] = Field(default_factory=list)


class Location(TripGoModel):
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: Optional[str] = None
    name: Optional[str] = None


class StopLocation(Location):
    code: Optional[str] = None
    timezone: Optional[str] = None
    region: Optional[str] = None
    short_name: Optional[str] = None
    popularity: Optional[int] = None
    types: Optional[List[str]] = None
    services: Optional[List[str]] = None
    wheelchair_accessible: Optional[bool] = None
    disruption_effect: Optional[str] = None


class ModeInfo(TripGoModel):
    identifier: Optional[str] = None
    alt: Optional[str] = None
    local_icon: Optional[str] = None
    remote_icon: Optional[str] = None
    operator_id: Optional[str] = Field(default=None, alias="operatorID")


class SegmentTemplate(TripGoModel):
    """Shared description of one kind of travel segment, keyed by `hash_code`."""
    hash_code: int
    type: Optional[str] = None
    mode_info: Optional[ModeInfo] = None
    from_: Optional[StopLocation] = Field(default=None, alias="from")
    to: Optional[StopLocation] = None
    is_continuation: Optional[bool] = None
    action: Optional[str] = None
    notes: Optional[str] = None


class SegmentReference(TripGoModel):
    """Time-bounded use of a SegmentTemplate inside one trip."""
    segment_template_hash_code: int
    start_time: int
    end_time: int
    real_time: Optional[bool] = None
    service_trip_id: Optional[str] = Field(default=None, alias="serviceTripID")
    service_direction: Optional[str] = None
    service_number: Optional[str] = None
    service_name: Optional[str] = None
    start_platform: Optional[str] = None


class Trip(TripGoModel):
    id: Optional[str] = None
    depart: int
    arrive: int
    weighted_score: float
    segments: List[SegmentReference] = Field(default_factory=list)
    money_cost: Optional[float] = None
    currency_symbol: Optional[str] = None
    calories_cost: Optional[float] = None
    carbon_cost: Optional[float] = None
    save_url: Optional[str] = Field(default=None, alias="saveURL")


class TripGroup(TripGoModel):
    trips: List[Trip] = Field(default_factory=list)


class RoutingResponse(TripGoModel):
    groups: Optional[List[TripGroup]] = None
    segment_templates: Optional[List[SegmentTemplate]] = None


class LocationGroup(TripGoModel):
    key: Optional[str] = None
    hash_code: Optional[int] = None
    stops: Optional[List[StopLocation]] = None
    bike_pods: Optional[List[StopLocation]] = None
    car_parks: Optional[List[StopLocation]] = None
    car_pods: Optional[List[StopLocation]] = None
    car_rentals: Optional[List[StopLocation]] = None
    free_floating: Optional[List[StopLocation]] = None


class LocationsResponse(TripGoModel):
    groups: Optional[List[LocationGroup]] = None


class VehicleLocation(TripGoModel):
    lat: Optional[float] = None
    lng: Optional[float] = None
    bearing: Optional[float] = None


class RealtimeVehicle(TripGoModel):
    id: Optional[str] = None
    last_update: Optional[int] = None
    label: Optional[str] = None
    location: Optional[VehicleLocation] = None
    occupancy: Optional[str] = None
    wifi: Optional[bool] = None


class ServiceInfo(TripGoModel):
    start_time: int
    service_trip_id: Optional[str] = Field(default=None, alias="serviceTripID")
    service_name: Optional[str] = None
    service_direction: Optional[str] = None
    service_number: Optional[str] = None
    route_id: Optional[str] = Field(default=None, alias="routeID")
    operator_id: Optional[str] = Field(default=None, alias="operatorID")
    operator: Optional[str] = None
    mode: Optional[str] = None
    wheelchair_accessible: Optional[bool] = None
    real_time_status: Optional[str] = None
    realtime_vehicle: Optional[RealtimeVehicle] = None
    real_time_departure: Optional[int] = None


class EmbarkationStop(TripGoModel):
    stop_code: str
    wheelchair_accessible: Optional[bool] = None
    services: Optional[List[ServiceInfo]] = None


class DeparturesResponse(TripGoModel):
    embarkation_stops: Optional[List[EmbarkationStop]] = None
    stops: Optional[List[StopLocation]] = None


# ---------------------------------------------------------------------------
# Tool results (what the calling agent sees)
# ---------------------------------------------------------------------------


class FormattedSegment(TripGoModel):
    mode: str
    duration: int = Field(..., description="Whole minutes")
    action: Optional[str] = None
    service_name: Optional[str] = None
    service_number: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None


class FormattedTrip(TripGoModel):
    id: Optional[str] = None
    depart: str
    arrive: str
    total_duration: int = Field(..., description="Whole minutes")
    segments: List[FormattedSegment] = Field(default_factory=list)
    cost: Optional[float] = None
    currency: Optional[str] = None
    calories_cost: Optional[float] = None
    carbon_cost: Optional[float] = None
    score: float
    url: Optional[str] = None


class RoutingQuery(TripGoModel):
    from_: Coordinates = Field(..., alias="from")
    to: Coordinates
    url: str
    timezone: str
    region: Optional[str] = None


class RoutingResult(TripGoModel):
    trips: List[FormattedTrip] = Field(default_factory=list)
    query: RoutingQuery


class SavedTrip(TripGoModel):
    url: str


class FormattedLocation(TripGoModel):
    lat: Optional[float] = None
    lng: Optional[float] = None
    name: str = ""
    type: str = Field(..., description="stop | bikePod | carPark | carPod | carRental | freeFloating")
    address: Optional[str] = None
    code: Optional[str] = None
    region: Optional[str] = None
    services: Optional[List[str]] = None


class LocationCounts(TripGoModel):
    stops: int = 0
    bike_pods: int = 0
    car_parks: int = 0
    car_pods: int = 0
    car_rentals: int = 0
    free_floating: int = 0


class LocationGroupSummary(TripGoModel):
    key: Optional[str] = None
    hash_code: Optional[int] = None
    location_counts: LocationCounts


class LocationsQuery(TripGoModel):
    lat: float
    lng: float
    radius: Optional[float] = None
    modes: Optional[List[str]] = None
    limit: Optional[int] = None


class LocationsResult(TripGoModel):
    locations: List[FormattedLocation] = Field(default_factory=list)
    groups: List[LocationGroupSummary] = Field(default_factory=list)
    total_locations: int = 0
    query: LocationsQuery


class ServiceSummary(TripGoModel):
    id: Optional[str] = None
    name: Optional[str] = None
    number: Optional[str] = None
    direction: Optional[str] = None
    operator: Optional[str] = None
    mode: Optional[str] = None


class VehicleSummary(TripGoModel):
    id: Optional[str] = None
    label: Optional[str] = None
    last_update: Optional[str] = None
    location: Optional[VehicleLocation] = None
    occupancy: Optional[str] = None
    wifi: Optional[bool] = None


class FormattedDeparture(TripGoModel):
    stop_code: str
    stop_name: Optional[str] = None
    scheduled_departure: str
    real_time_departure: Optional[str] = None
    real_time: bool = False
    service: ServiceSummary
    wheelchair_accessible: Optional[bool] = None
    vehicle: Optional[VehicleSummary] = None


class DeparturesQuery(TripGoModel):
    region: str
    stop_codes: List[str]


class DeparturesResult(TripGoModel):
    departures: List[FormattedDeparture] = Field(default_factory=list)
    query: DeparturesQuery
