from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.validators import require_latitude, require_longitude
from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import ValidationError


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (haversine)."""
    lat1 = require_latitude(lat1)
    lat2 = require_latitude(lat2)
    lon1 = require_longitude(lon1)
    lon2 = require_longitude(lon2)

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def within_fence(distance: float, radius: float) -> bool:
    if not (math.isfinite(distance) and math.isfinite(radius)):
        raise ValidationError("distance and radius must be finite")
    return distance <= radius


@dataclass(frozen=True)
class LocationFix:
    """A single GPS fix submitted with a check-in/out."""

    latitude: float
    longitude: float
    captured_at: Optional[datetime] = None

    @classmethod
    def parse(cls, latitude, longitude, captured_at: Optional[datetime] = None) -> "LocationFix":
        return cls(
            latitude=require_latitude(latitude),
            longitude=require_longitude(longitude),
            captured_at=captured_at,
        )


@dataclass(frozen=True)
class FenceCheck:
    distance: float
    required: float
    inside: bool


@dataclass(frozen=True)
class GeoFence:
    latitude: float
    longitude: float
    radius_meters: float

    def evaluate(self, fix: LocationFix) -> FenceCheck:
        distance = distance_meters(fix.latitude, fix.longitude, self.latitude, self.longitude)
        return FenceCheck(
            distance=distance,
            required=self.radius_meters,
            inside=within_fence(distance, self.radius_meters),
        )
