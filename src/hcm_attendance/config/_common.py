import os


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hcm_db"),
    }


BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Karachi")
SHIFT_START = os.getenv("SHIFT_START", "09:00")
SHIFT_END = os.getenv("SHIFT_END", "18:00")
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "15"))

# Office geofence
OFFICE_LATITUDE = float(os.getenv("OFFICE_LATITUDE", "33.63"))
OFFICE_LONGITUDE = float(os.getenv("OFFICE_LONGITUDE", "72.92"))
GEOFENCE_RADIUS_METERS = float(os.getenv("GEOFENCE_RADIUS_METERS", "600"))
LOCATION_MAX_AGE_SECONDS = int(os.getenv("LOCATION_MAX_AGE_SECONDS", "120"))

PAYROLL_LOCK_TIMEOUT_SECONDS = int(os.getenv("PAYROLL_LOCK_TIMEOUT_SECONDS", "10"))
PAYROLL_OVERTIME_MULTIPLIER = float(os.getenv("PAYROLL_OVERTIME_MULTIPLIER", "0"))
