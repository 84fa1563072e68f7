from __future__ import annotations

import math

import pytest

from hcm_attendance.core.exceptions import ValidationError
from hcm_attendance.geofence.evaluator import GeoFence, LocationFix, distance_meters, within_fence

from fakes import OFFICE_LAT, OFFICE_LON, fix_at


@pytest.mark.parametrize(
    "a, b",
    [
        ((33.63, 72.92), (33.6349, 72.92)),
        ((51.5007, -0.1246), (40.6892, -74.0445)),
        ((-33.8568, 151.2153), (35.6586, 139.7454)),
        ((0.0, 179.9), (0.0, -179.9)),
    ],
)
def test_distance_is_symmetric(a, b):
    assert distance_meters(*a, *b) == pytest.approx(distance_meters(*b, *a))


def test_distance_is_zero_for_identical_points():
    assert distance_meters(OFFICE_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON) == 0


def test_distance_along_meridian_matches_arc_length():
    fix = fix_at(550)
    assert distance_meters(fix.latitude, fix.longitude, OFFICE_LAT, OFFICE_LON) == pytest.approx(550, abs=0.01)


def test_within_fence_includes_boundary():
    assert within_fence(600, 600)
    assert within_fence(599.9, 600)
    assert not within_fence(600.1, 600)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, 91, -90.5, None, "north"])
def test_invalid_latitude_rejected(bad):
    with pytest.raises(ValidationError):
        distance_meters(bad, 0, 0, 0)


def test_invalid_longitude_rejected():
    with pytest.raises(ValidationError):
        distance_meters(0, 180.5, 0, 0)


def test_within_fence_rejects_non_finite():
    with pytest.raises(ValidationError):
        within_fence(math.nan, 600)


def test_geofence_evaluate_reports_distance_and_radius():
    fence = GeoFence(OFFICE_LAT, OFFICE_LON, 600)

    inside = fence.evaluate(fix_at(550))
    outside = fence.evaluate(fix_at(700))

    assert inside.inside and inside.required == 600
    assert not outside.inside
    assert round(outside.distance) == 700


def test_location_fix_parse_accepts_numeric_strings():
    fix = LocationFix.parse("33.63", "72.92")
    assert (fix.latitude, fix.longitude) == (33.63, 72.92)
