from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union
from urllib.parse import urlsplit

import requests

from ..core.config import TRIPGO_API_BASE_URL, Settings
from ..core.errors import UpstreamError

logger = logging.getLogger(__name__)

QueryParams = Union[Dict[str, Any], Sequence[Tuple[str, Any]]]


@dataclass
class TripGoClient:
    """Thin wrapper around the TripGo REST API.

    Calls to TripGo hosts carry the API key header; every call returns the
    decoded JSON object.
    Anything the API flags as a failure is raised as UpstreamError; network
    problems surface as requests exceptions.
    """
    api_key: str
    base_url: str = TRIPGO_API_BASE_URL
    timeout_s: int = 30

    @classmethod
    def from_settings(cls, settings: Settings) -> "TripGoClient":
        return cls(
            api_key=settings.api_key.get_secret_value(),
            base_url=settings.base_url,
            timeout_s=settings.timeout_s,
        )

    def url_for(self, endpoint: str, params: Optional[QueryParams] = None) -> str:
        """Absolute, fully encoded URL for an endpoint (e.g. "routing.json")."""
        if endpoint.startswith(("http://", "https://")):
            url = endpoint
        else:
            url = f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        prepared = requests.PreparedRequest()
        prepared.prepare_url(url, params)
        return prepared.url

    def get(self, endpoint: str, params: Optional[QueryParams] = None, context: str = "TripGo request") -> Dict[str, Any]:
        url = self.url_for(endpoint, params)
        logger.debug("GET %s", url)
        r = requests.get(url, headers=self._headers(url), timeout=self.timeout_s)
        return self._decode(r, context)

    def post(self, endpoint: str, body: Dict[str, Any], context: str = "TripGo request") -> Dict[str, Any]:
        url = self.url_for(endpoint)
        logger.debug("POST %s %s", url, body)
        r = requests.post(url, json=body, headers=self._headers(url), timeout=self.timeout_s)
        return self._decode(r, context)

    def _headers(self, url: str) -> Dict[str, str]:
        host = urlsplit(url).hostname or ""
        if not self._is_tripgo_host(host):
            logger.warning("Withholding the TripGo API key from foreign host %s", host)
            return {}
        return {"X-TripGo-Key": self.api_key}

    def _is_tripgo_host(self, host: str) -> bool:
        # The API host itself or a sibling under the same domain (regional servers)
        base_host = urlsplit(self.base_url).hostname or ""
        domain = ".".join(base_host.split(".")[-2:])
        return bool(base_host) and (host == base_host or host.endswith(f".{domain}"))

    @staticmethod
    def _decode(r: requests.Response, context: str) -> Dict[str, Any]:
        if r.status_code >= 400:
            # Surface TripGo's own error text when the body carries one
            try:
                err = r.json()
                reason = err.get("error") if isinstance(err, dict) else None
            except ValueError:
                reason = None
            extra = f" Reason: {reason}" if reason else ""
            raise UpstreamError(f"{context} failed ({r.status_code}).{extra}", status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as exc:
            raise UpstreamError(f"{context} returned a non-JSON response", status_code=r.status_code) from exc

        if not isinstance(data, dict):
            raise UpstreamError(f"{context} returned an unexpected payload", status_code=r.status_code)
        if data.get("error"):
            raise UpstreamError(f"{context} failed: {data['error']}", status_code=r.status_code)
        return data
