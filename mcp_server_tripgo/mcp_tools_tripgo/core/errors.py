from __future__ import annotations

from typing import Optional


class TripGoError(Exception):
    """Base class for everything the toolkit raises on purpose."""


class UpstreamError(TripGoError):
    """The TripGo API reported an error or answered with something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(TripGoError, ValueError):
    """An encoded polyline could not be decoded."""


class UnknownTimezoneError(TripGoError, ValueError):
    """The IANA zone name is not known to the host timezone database."""

    def __init__(self, zone_name: str) -> None:
        super().__init__(f"Unknown timezone: '{zone_name}'")
        self.zone_name = zone_name
