"""Tests for polyline decoding and point-in-polygon."""

import pytest

from mcp_server_tripgo.mcp_tools_tripgo.core.errors import DecodeError
from mcp_server_tripgo.mcp_tools_tripgo.utils.geo import (
    close_ring,
    coordinate_in_encoded_polygon,
    decode_polyline,
    format_degrees,
    point_in_polygon,
)

# Example from Google's polyline algorithm documentation
GOOGLE_EXAMPLE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
GOOGLE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]

SQUARE = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]


class TestDecodePolyline:

    def test_decodes_reference_example(self):
        points = decode_polyline(GOOGLE_EXAMPLE)
        assert len(points) == 3
        for (lat, lng), (exp_lat, exp_lng) in zip(points, GOOGLE_POINTS):
            assert lat == pytest.approx(exp_lat)
            assert lng == pytest.approx(exp_lng)

    def test_encoder_and_decoder_agree(self, encode_polyline):
        points = [(-33.86785, 151.20732), (-33.87, 151.21), (-34.0, 150.5)]
        decoded = decode_polyline(encode_polyline(points))
        assert decoded == [pytest.approx(p) for p in points]

    def test_empty_string_decodes_to_nothing(self):
        assert decode_polyline("") == []

    def test_truncated_value_raises(self):
        with pytest.raises(DecodeError):
            decode_polyline("_p~i")

    def test_latitude_without_longitude_raises(self):
        with pytest.raises(DecodeError):
            decode_polyline("_p~iF")

    def test_invalid_character_raises(self):
        with pytest.raises(DecodeError, match="offset 2"):
            decode_polyline("_p iF~ps|U")

    def test_decode_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            decode_polyline("_p~i")


class TestPointInPolygon:

    def test_inside_and_outside_square(self):
        assert point_in_polygon(5.0, 5.0, SQUARE) is True
        assert point_in_polygon(15.0, 5.0, SQUARE) is False
        assert point_in_polygon(5.0, -0.5, SQUARE) is False

    def test_triangle_from_encoded_polygon(self):
        assert coordinate_in_encoded_polygon(40.817, -122.534, GOOGLE_EXAMPLE) is True
        assert coordinate_in_encoded_polygon(40.817, -119.0, GOOGLE_EXAMPLE) is False

    def test_concave_polygon_notch_is_outside(self):
        # U shape opening to the north
        u_shape = [(0, 0), (0, 9), (9, 9), (9, 6), (3, 6), (3, 3), (9, 3), (9, 0)]
        assert point_in_polygon(6.0, 4.5, u_shape) is False
        assert point_in_polygon(6.0, 1.5, u_shape) is True
        assert point_in_polygon(6.0, 7.5, u_shape) is True

    @pytest.mark.parametrize("point", [(5.0, 5.0), (15.0, 5.0), (0.0, 5.0), (10.0, 10.0), (9.99, 0.01)])
    def test_closing_the_ring_is_idempotent(self, point):
        closed = close_ring(SQUARE)
        assert closed[0] == closed[-1]
        assert close_ring(closed) == closed
        assert point_in_polygon(*point, SQUARE) == point_in_polygon(*point, closed)

    @pytest.mark.parametrize("point", [(0.0, 5.0), (5.0, 0.0), (10.0, 10.0), (0.0, 0.0)])
    def test_boundary_points_are_consistent(self, point):
        results = {point_in_polygon(*point, SQUARE) for _ in range(5)}
        assert len(results) == 1

    def test_degenerate_polygon_contains_nothing(self):
        assert point_in_polygon(0.0, 0.0, [(0.0, 0.0), (1.0, 1.0)]) is False
        assert point_in_polygon(0.0, 0.0, []) is False


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.00001, "0.00001"),
        (-0.00005, "-0.00005"),
        (-33.87, "-33.87"),
        (151.2, "151.2"),
        (1.0, "1.0"),
        (0, "0.0"),
    ],
)
def test_format_degrees_never_uses_exponents(value, expected):
    assert format_degrees(value) == expected
