from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from . import constants


@dataclass(frozen=True)
class Settings:
    """Typed view over a settings module (see ``hcm_attendance.config``)."""

    db_config: dict
    business_timezone: str = constants.DEFAULT_BUSINESS_TIMEZONE
    shift_start: str = constants.DEFAULT_SHIFT_START
    shift_end: str = constants.DEFAULT_SHIFT_END
    late_grace_minutes: int = constants.DEFAULT_LATE_GRACE_MINUTES
    office_latitude: float = 33.63
    office_longitude: float = 72.92
    geofence_radius_meters: float = constants.DEFAULT_GEOFENCE_RADIUS_METERS
    location_max_age_seconds: int = constants.DEFAULT_LOCATION_MAX_AGE_SECONDS
    payroll_lock_timeout_seconds: int = constants.DEFAULT_PAYROLL_LOCK_TIMEOUT_SECONDS
    payroll_overtime_multiplier: float = 0.0
    debug: bool = False
    auto_init_db: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_module(cls, settings: ModuleType) -> "Settings":
        def get(name: str, default):
            return getattr(settings, name, default)

        return cls(
            db_config=dict(get("DB_CONFIG", {})),
            business_timezone=str(get("BUSINESS_TIMEZONE", constants.DEFAULT_BUSINESS_TIMEZONE)),
            shift_start=str(get("SHIFT_START", constants.DEFAULT_SHIFT_START)),
            shift_end=str(get("SHIFT_END", constants.DEFAULT_SHIFT_END)),
            late_grace_minutes=int(get("LATE_GRACE_MINUTES", constants.DEFAULT_LATE_GRACE_MINUTES)),
            office_latitude=float(get("OFFICE_LATITUDE", 33.63)),
            office_longitude=float(get("OFFICE_LONGITUDE", 72.92)),
            geofence_radius_meters=float(get("GEOFENCE_RADIUS_METERS", constants.DEFAULT_GEOFENCE_RADIUS_METERS)),
            location_max_age_seconds=int(get("LOCATION_MAX_AGE_SECONDS", constants.DEFAULT_LOCATION_MAX_AGE_SECONDS)),
            payroll_lock_timeout_seconds=int(
                get("PAYROLL_LOCK_TIMEOUT_SECONDS", constants.DEFAULT_PAYROLL_LOCK_TIMEOUT_SECONDS)
            ),
            payroll_overtime_multiplier=float(get("PAYROLL_OVERTIME_MULTIPLIER", 0.0)),
            debug=bool(get("DEBUG", False)),
            auto_init_db=bool(get("AUTO_INIT_DB", False)),
            log_level=str(get("LOG_LEVEL", "INFO")),
        )
