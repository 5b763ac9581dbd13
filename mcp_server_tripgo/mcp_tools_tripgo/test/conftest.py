"""Shared fixtures: a TripGo client, canned HTTP responses, encoded polygons."""

from typing import Any, Callable, List, Sequence, Tuple
from unittest.mock import MagicMock

import pytest

from mcp_server_tripgo.mcp_tools_tripgo.services.client import TripGoClient

BASE_URL = "https://api.tripgo.test/v1"


def _encode_polyline(points: Sequence[Tuple[float, float]], precision: int = 5) -> str:
    """Google Encoded Polyline encoder, used to build test regions."""
    factor = 10 ** precision
    out: List[str] = []
    prev_lat = prev_lng = 0
    for lat, lng in points:
        ilat = int(round(lat * factor))
        ilng = int(round(lng * factor))
        for delta in (ilat - prev_lat, ilng - prev_lng):
            value = ~(delta << 1) if delta < 0 else delta << 1
            while value >= 0x20:
                out.append(chr((0x20 | (value & 0x1F)) + 63))
                value >>= 5
            out.append(chr(value + 63))
        prev_lat, prev_lng = ilat, ilng
    return "".join(out)


# Unclosed box around greater Sydney
SYDNEY_BOX = [(-34.2, 150.6), (-34.2, 151.5), (-33.4, 151.5), (-33.4, 150.6)]
# Unclosed box around Melbourne
MELBOURNE_BOX = [(-38.3, 144.5), (-38.3, 145.5), (-37.5, 145.5), (-37.5, 144.5)]


@pytest.fixture
def encode_polyline() -> Callable[..., str]:
    return _encode_polyline


@pytest.fixture
def client() -> TripGoClient:
    return TripGoClient(api_key="test-key", base_url=BASE_URL, timeout_s=5)


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for fake `requests.Response` objects."""

    def _make(payload: Any, status_code: int = 200) -> MagicMock:
        resp = MagicMock()
        resp.status_code = status_code
        resp.json.return_value = payload
        return resp

    return _make


@pytest.fixture
def sydney_region() -> dict:
    return {
        "name": "AU_NSW_Sydney",
        "polygon": _encode_polyline(SYDNEY_BOX),
        "timezone": "Australia/Sydney",
    }


@pytest.fixture
def melbourne_region() -> dict:
    return {
        "name": "AU_VIC_Melbourne",
        "polygon": _encode_polyline(MELBOURNE_BOX),
        "timezone": "Australia/Melbourne",
    }


@pytest.fixture
def regions_payload(sydney_region, melbourne_region) -> dict:
    return {"regions": [melbourne_region, sydney_region]}
