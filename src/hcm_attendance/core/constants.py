"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000

DEFAULT_GEOFENCE_RADIUS_METERS = 600
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "18:00"
DEFAULT_BUSINESS_TIMEZONE = "Asia/Karachi"
DEFAULT_LOCATION_MAX_AGE_SECONDS = 120

STANDARD_DAY_MINUTES = 8 * 60
HALF_DAY_HOURS = 4

FALLBACK_WORKING_DAYS = 22
DEFAULT_PAYROLL_LOCK_TIMEOUT_SECONDS = 10

DEFAULT_PAGE_SIZE = 50
DEFAULT_HISTORY_LIMIT = 200
