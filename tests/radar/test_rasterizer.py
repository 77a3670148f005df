"""Test radial rasterization into radar-relative bins."""

import numpy as np
import pytest

from nexrad_json.contracts import UnsupportedProductError
from nexrad_json.radar.rasterizer import gate_mask, math_angle, radial_to_bins
from nexrad_json.radar.volume import BELOW_THRESHOLD, FOLDED

pytestmark = [pytest.mark.unit, pytest.mark.radar]


def _ranges(b):
    """Horizontal near and far ranges of a bin at zero elevation."""
    return np.linalg.norm(b.a[:2]), np.linalg.norm(b.c[:2])


class TestFiltering:

    def test_sentinels_never_produce_bins(self, make_radial):
        """Below-threshold and folded gates are dropped even with a very low minimum."""
        radial = make_radial(gates=[BELOW_THRESHOLD, FOLDED, 10.0])
        bins = radial_to_bins(radial, "ref", minimum=-1e9)

        assert [b.value for b in bins] == [10.0]

    def test_sentinels_dropped_when_minimum_is_above_them(self, make_radial):
        radial = make_radial(gates=[BELOW_THRESHOLD, FOLDED])
        assert radial_to_bins(radial, "ref", minimum=1e9) == []

    def test_minimum_is_inclusive(self, make_radial):
        """value == minimum keeps the gate; strictly below drops it."""
        radial = make_radial(gates=[4.9, 5.0, 5.1])
        bins = radial_to_bins(radial, "ref", minimum=5.0)

        assert [b.value for b in bins] == [5.0, 5.1]

    def test_negative_values_kept_with_negative_minimum(self, make_radial):
        radial = make_radial(gates=[-20.0, -35.0])
        bins = radial_to_bins(radial, "ref", minimum=-30.0)

        assert [b.value for b in bins] == [-20.0]

    def test_gate_mask_matches_rule(self):
        gates = np.array([BELOW_THRESHOLD, FOLDED, -1.0, 0.0, 3.0])
        np.testing.assert_array_equal(
            gate_mask(gates, 0.0),
            [False, False, False, True, True],
        )


class TestRanges:

    def test_far_edge_is_near_edge_plus_spacing(self, make_radial):
        radial = make_radial(gates=[10.0, 10.0, 10.0], first_gate_range=1000.0, gate_spacing=250.0)
        bins = radial_to_bins(radial, "ref", minimum=0.0)

        for b in bins:
            near, far = _ranges(b)
            assert far == pytest.approx(near + 250.0)

    def test_range_advances_across_skipped_gates(self, make_radial):
        radial = make_radial(gates=[10.0, BELOW_THRESHOLD, -5.0, 10.0],
                             first_gate_range=1000.0, gate_spacing=250.0)
        bins = radial_to_bins(radial, "ref", minimum=0.0)

        assert len(bins) == 2
        assert _ranges(bins[0]) == pytest.approx((1000.0, 1250.0))
        assert _ranges(bins[1]) == pytest.approx((1750.0, 2000.0))

    def test_elevation_lifts_corners(self, make_radial):
        radial = make_radial(gates=[10.0], elevation=30.0, first_gate_range=1000.0)
        b = radial_to_bins(radial, "ref", minimum=0.0)[0]

        assert b.a[2] == pytest.approx(1000.0 * np.sin(np.deg2rad(30.0)))
        assert np.linalg.norm(b.a) == pytest.approx(1000.0)


class TestCorners:

    def test_corner_order_facing_east(self, make_radial):
        """Facing east (azimuth 90): left is north (+y), near is closer to the radar."""
        radial = make_radial(gates=[10.0], azimuth=90.0, azimuth_resolution=1.0)
        b = radial_to_bins(radial, "ref", minimum=0.0)[0]

        assert b.a[1] > 0 and b.c[1] > 0
        assert b.b[1] < 0 and b.d[1] < 0
        assert b.a[0] < b.c[0]
        assert b.b[0] < b.d[0]

    def test_half_beam_offsets(self, make_radial):
        radial = make_radial(gates=[10.0], azimuth=90.0, azimuth_resolution=2.0,
                             first_gate_range=1000.0)
        b = radial_to_bins(radial, "ref", minimum=0.0)[0]
        half = np.deg2rad(1.0)

        np.testing.assert_allclose(b.a, [1000.0 * np.cos(half), 1000.0 * np.sin(half), 0.0], atol=1e-9)
        np.testing.assert_allclose(b.b, [1000.0 * np.cos(half), -1000.0 * np.sin(half), 0.0], atol=1e-9)

    def test_time_slot_is_zero(self, make_radial):
        b = radial_to_bins(make_radial(gates=[10.0]), "ref", minimum=0.0)[0]
        assert np.all(b.corners[:, 3] == 0.0)


class TestAzimuthWrap:

    def test_zero_and_360_are_identical(self, make_radial):
        assert math_angle(0.0) == math_angle(360.0) == 90.0

        a = radial_to_bins(make_radial(gates=[10.0], azimuth=0.0), "ref", 0.0)[0]
        b = radial_to_bins(make_radial(gates=[10.0], azimuth=360.0), "ref", 0.0)[0]
        np.testing.assert_allclose(a.corners, b.corners, atol=1e-9)

    def test_near_north_is_not_negative(self):
        assert math_angle(359.5) == pytest.approx(90.5)
        assert 0.0 <= math_angle(90.0) < 360.0
        assert math_angle(91.0) == pytest.approx(359.0)

    def test_just_past_east_stays_below_360(self):
        theta = math_angle(np.nextafter(90.0, 91.0))
        assert 0.0 <= theta < 360.0

    def test_north_points_along_y(self, make_radial):
        b = radial_to_bins(make_radial(gates=[10.0], azimuth=0.0), "ref", 0.0)[0]
        centre = b.corners[:, :2].mean(axis=0)
        assert centre[1] > 0
        assert abs(centre[0]) < 1e-6


class TestEdgeCases:

    def test_zero_gates_yields_empty(self, make_radial):
        assert radial_to_bins(make_radial(gates=[]), "ref", 0.0) == []

    def test_unsupported_product_raises(self, make_radial):
        with pytest.raises(UnsupportedProductError):
            radial_to_bins(make_radial(), "zdr", 0.0)

    def test_missing_product_field_raises(self, make_radial):
        with pytest.raises(UnsupportedProductError, match="not present"):
            radial_to_bins(make_radial(), "vel", 0.0)

    def test_bins_do_not_share_corner_rows(self, make_radial):
        bins = radial_to_bins(make_radial(gates=[10.0, 20.0]), "ref", 0.0)
        bins[0].corners[:] = 0.0
        assert np.any(bins[1].corners != 0.0)
