from __future__ import annotations

from ..core.errors import UpstreamError
from ..core.schemas import SavedTrip
from .client import TripGoClient


def save_trip(client: TripGoClient, trip_url: str) -> SavedTrip:
    """Exchange a trip URL from a routing result for a persistent, shareable one."""
    data = client.get(trip_url, context="Saving trip")
    url = data.get("url")
    if not url:
        raise UpstreamError("Saving trip failed: response carries no url")
    return SavedTrip(url=str(url))
