"""mcp_tools_tripgo package

Purpose:
- Wrap the TripGo trip-planning API (routing, locations, departures, saved
  trips) in small, testable services.
- Expose those services via an MCP server (official python-sdk / FastMCP), so an LLM can call tools.

Structure:
- core/: schemas, errors, settings + region cache
- services/: TripGo client and one module per tool
- utils/: pure helpers (polyline geometry, timezones)
- mcp/: FastMCP server + tool wiring
"""

from .core.errors import DecodeError, TripGoError, UnknownTimezoneError, UpstreamError  # noqa: F401
from .core.schemas import Coordinates, FormattedTrip, Region, RoutingResult  # noqa: F401
