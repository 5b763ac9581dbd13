"""Tests for the TripGo HTTP client and save-trip service."""

from unittest.mock import patch

import pytest
import requests

from mcp_server_tripgo.mcp_tools_tripgo.core.config import Settings
from mcp_server_tripgo.mcp_tools_tripgo.core.errors import UpstreamError
from mcp_server_tripgo.mcp_tools_tripgo.services.client import TripGoClient
from mcp_server_tripgo.mcp_tools_tripgo.services.trips import save_trip


class TestTripGoClient:

    def test_url_for_encodes_repeated_params(self, client):
        url = client.url_for("routing.json", [("modes", "pt_pub"), ("modes", "wa_wal"), ("v", "11")])
        assert url == "https://api.tripgo.test/v1/routing.json?modes=pt_pub&modes=wa_wal&v=11"

    def test_url_for_keeps_absolute_urls(self, client):
        assert client.url_for("https://example.test/trip/1") == "https://example.test/trip/1"

    def test_from_settings(self):
        settings = Settings(api_key="secret", base_url="https://api.tripgo.test/v1", timeout_s=7)
        client = TripGoClient.from_settings(settings)
        assert client.api_key == "secret"
        assert client.timeout_s == 7

    @patch("requests.get")
    def test_get_sends_key_and_timeout(self, mock_get, client, make_response):
        mock_get.return_value = make_response({"ok": True})

        assert client.get("regions.json") == {"ok": True}
        _, kwargs = mock_get.call_args
        assert kwargs["headers"] == {"X-TripGo-Key": "test-key"}
        assert kwargs["timeout"] == 5

    @patch("requests.get")
    def test_key_goes_to_sibling_tripgo_hosts(self, mock_get, client, make_response):
        mock_get.return_value = make_response({"ok": True})

        client.get("https://regional.tripgo.test/v1/trip/1")

        assert mock_get.call_args[1]["headers"] == {"X-TripGo-Key": "test-key"}

    @patch("requests.get")
    def test_key_is_withheld_from_foreign_hosts(self, mock_get, client, make_response, caplog):
        mock_get.return_value = make_response({"ok": True})

        client.get("https://collector.example/trip/1")

        assert mock_get.call_args[1]["headers"] == {}
        assert "collector.example" in caplog.text

    @patch("requests.get")
    def test_http_error_carries_upstream_reason(self, mock_get, client, make_response):
        mock_get.return_value = make_response({"error": "Invalid API key"}, status_code=401)

        with pytest.raises(UpstreamError) as exc_info:
            client.get("routing.json", context="Routing")

        assert exc_info.value.status_code == 401
        assert "Routing failed (401)" in str(exc_info.value)
        assert "Invalid API key" in str(exc_info.value)

    @patch("requests.get")
    def test_http_error_without_json_body(self, mock_get, client, make_response):
        resp = make_response(None, status_code=502)
        resp.json.side_effect = ValueError("not json")
        mock_get.return_value = resp

        with pytest.raises(UpstreamError, match=r"failed \(502\)\.$"):
            client.get("routing.json")

    @patch("requests.get")
    def test_non_json_body(self, mock_get, client, make_response):
        resp = make_response(None)
        resp.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = resp

        with pytest.raises(UpstreamError, match="non-JSON"):
            client.get("routing.json")

    @patch("requests.get")
    def test_non_object_body(self, mock_get, client, make_response):
        mock_get.return_value = make_response([1, 2, 3])
        with pytest.raises(UpstreamError, match="unexpected payload"):
            client.get("routing.json")

    @patch("requests.get")
    def test_network_errors_propagate(self, mock_get, client):
        mock_get.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(requests.ConnectionError):
            client.get("routing.json")


class TestSaveTrip:

    @patch("requests.get")
    def test_returns_persistent_url(self, mock_get, client, make_response):
        mock_get.return_value = make_response({"url": "https://tripgo.com/trip/xyz"})

        saved = save_trip(client, "https://api.tripgo.test/v1/trip/save/abc")

        assert saved.to_payload() == {"url": "https://tripgo.com/trip/xyz"}
        assert mock_get.call_args[0][0] == "https://api.tripgo.test/v1/trip/save/abc"
        assert mock_get.call_args[1]["headers"] == {"X-TripGo-Key": "test-key"}

    @patch("requests.get")
    def test_error_field_raises(self, mock_get, client, make_response):
        mock_get.return_value = make_response({"error": "Trip expired"})
        with pytest.raises(UpstreamError, match="Saving trip failed: Trip expired"):
            save_trip(client, "https://api.tripgo.test/v1/trip/save/abc")

    @patch("requests.get")
    def test_missing_url_raises(self, mock_get, client, make_response):
        mock_get.return_value = make_response({})
        with pytest.raises(UpstreamError, match="no url"):
            save_trip(client, "https://api.tripgo.test/v1/trip/save/abc")

    @patch("requests.get")
    def test_foreign_trip_url_does_not_receive_the_key(self, mock_get, client, make_response):
        mock_get.return_value = make_response({"url": "https://tripgo.com/trip/xyz"})

        save_trip(client, "https://collector.example/trip/save/abc")

        assert "X-TripGo-Key" not in mock_get.call_args[1]["headers"]
