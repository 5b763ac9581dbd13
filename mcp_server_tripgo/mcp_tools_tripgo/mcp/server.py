"""MCP server (official python-sdk) exposing the TripGo toolkit.

This uses FastMCP from the official MCP Python SDK:
- Tools are ordinary Python functions decorated with @mcp.tool().
- Schemas are derived automatically from type hints / pydantic Field metadata.
- Transport (streamable HTTP, SSE, stdio) is picked on the command line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Annotated, Any, Callable, Dict, List, Optional, TypeVar

import requests
import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from ..core.cache import FileCache
from ..core.config import get_settings
from ..core.errors import TripGoError
from ..core.schemas import Coordinates, RoutingMode
from ..services.client import TripGoClient
from ..services.departures import get_departures
from ..services.locations import search_locations
from ..services.routing import plan_trip
from ..services.trips import save_trip

T = TypeVar("T")


# ---------------------------------------------------------------------------
# MCP-Server & Tools
# ---------------------------------------------------------------------------

mcp = FastMCP(name="tripgo", stateless_http=False)

logger = logging.getLogger("tripgo-mcp")


def _client() -> TripGoClient:
    return TripGoClient.from_settings(get_settings())


def _regions_cache() -> Optional[FileCache]:
    settings = get_settings()
    if not settings.cache_dir:
        return None
    return FileCache(settings.cache_dir, ttl_seconds=settings.regions_ttl_seconds)


def _run(tool_name: str, call: Callable[[], T]) -> T:
    """Run a tool body, turning failures into a single agent-readable error."""
    try:
        return call()
    except (TripGoError, ValueError, requests.RequestException) as exc:
        logger.error("%s failed: %s", tool_name, exc)
        raise ToolError(f"Error in {tool_name}: {exc}") from exc


@mcp.tool(name="tripgo-routing")
def routing(
    fromLat: Annotated[float, Field(description="Latitude of the origin location")],
    fromLng: Annotated[float, Field(description="Longitude of the origin location")],
    toLat: Annotated[float, Field(description="Latitude of the destination location")],
    toLng: Annotated[float, Field(description="Longitude of the destination location")],
    departureTime: Annotated[
        Optional[str],
        Field(description="ISO datetime to depart after. Without an offset it is read in the origin's local time."),
    ] = None,
    arrivalTime: Annotated[
        Optional[str],
        Field(description="ISO datetime to arrive before. Ignored when departureTime is given."),
    ] = None,
    modes: Annotated[
        Optional[List[RoutingMode]],
        Field(
            description="Transportation modes to include: pt_pub (public transit), cy_bic (cycling), "
            "me_car (driving), ps_tax (taxi), wa_wal (walking)."
        ),
    ] = None,
    maxWalkingTime: Annotated[Optional[int], Field(description="Maximum walking time in minutes")] = None,
    wheelchair: Annotated[Optional[bool], Field(description="Whether to include wheelchair accessible options")] = None,
    limit: Annotated[int, Field(description="Maximum number of trip groups to return")] = 3,
) -> Dict[str, Any]:
    """Plan a trip between two locations with various transportation modes."""
    result = _run(
        "tripgo_routing",
        lambda: plan_trip(
            _client(),
            origin=Coordinates(lat=fromLat, lng=fromLng),
            destination=Coordinates(lat=toLat, lng=toLng),
            departure_time=departureTime,
            arrival_time=arrivalTime,
            modes=modes,
            max_walking_minutes=maxWalkingTime,
            wheelchair=wheelchair,
            limit=limit,
            cache=_regions_cache(),
        ),
    )
    return result.to_payload()


@mcp.tool(name="tripgo-get-trip-url")
def get_trip_url(
    tripURL: Annotated[str, Field(description="URL of the trip to fetch as previously returned by tripgo-routing")],
) -> Dict[str, Any]:
    """Retrieve a persistent URL for a trip returned by tripgo-routing, which can be opened in a web browser."""
    return _run("tripgo_save", lambda: save_trip(_client(), tripURL)).to_payload()


@mcp.tool(name="tripgo-locations")
def locations(
    lat: Annotated[float, Field(description="Latitude of the search center")],
    lng: Annotated[float, Field(description="Longitude of the search center")],
    radius: Annotated[Optional[float], Field(description="Search radius in meters")] = None,
    modes: Annotated[Optional[List[str]], Field(description="Transportation modes to include in results")] = None,
    limit: Annotated[int, Field(description="Maximum number of locations to return")] = 10,
) -> Dict[str, Any]:
    """Search for locations (stops, car parks, bike and car share pods, ...) near a point."""
    result = _run(
        "tripgo_locations",
        lambda: search_locations(_client(), lat=lat, lng=lng, radius=radius, modes=modes, limit=limit),
    )
    return result.to_payload()


@mcp.tool(name="tripgo-departures")
def departures(
    region: Annotated[str, Field(description="Region code for the transit system")],
    stopCodes: Annotated[List[str], Field(description="List of stop codes to get departures for")],
    timeStamp: Annotated[
        Optional[str],
        Field(description="ISO datetime to list departures from (UTC if no offset)"),
    ] = None,
    limit: Annotated[int, Field(description="Maximum number of departures to return")] = 10,
) -> Dict[str, Any]:
    """Get upcoming departures, including realtime information, for a list of stops."""
    result = _run(
        "tripgo_departures",
        lambda: get_departures(_client(), region=region, stop_codes=stopCodes, time_stamp=timeStamp, limit=limit),
    )
    return result.to_payload()


# ---------------------------------------------------------------------------
# ASGI apps & entry point
# ---------------------------------------------------------------------------

# Streamable HTTP endpoint is /mcp
starlette_app = mcp.streamable_http_app()


def main() -> None:
    """Start the TripGo MCP server."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--transport", choices=["streamable-http", "sse", "stdio"], default="streamable-http")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(stream=sys.stderr, level=settings.log_level)

    if not settings.has_api_key:
        logger.warning("TRIPGO_API_KEY is not set; TripGo requests will be rejected.")

    if args.transport == "stdio":
        logger.info("Starting TripGo MCP server (stdio) …")
        mcp.run(transport="stdio")
        return

    if args.transport == "sse":
        app = mcp.sse_app()
        path = "/sse"
    else:
        app = starlette_app
        path = "/mcp"

    logger.info(
        "Starting TripGo MCP server (%s) on http://%s:%d%s …",
        args.transport,
        args.host,
        args.port,
        path,
    )

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        reload=False,
        loop="asyncio",
    )


if __name__ == "__main__":
    main()
