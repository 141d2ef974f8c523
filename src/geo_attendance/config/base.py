import os

from ..core import constants


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

# Attendance policy
STANDARD_WORKING_HOURS = _env_float("STANDARD_WORKING_HOURS", constants.STANDARD_WORKING_HOURS)
AUTO_CHECKOUT_AFTER_HOURS = _env_float("AUTO_CHECKOUT_AFTER_HOURS", constants.AUTO_CHECKOUT_AFTER_HOURS)
LOCATION_MATCH_RADIUS_METERS = _env_float("LOCATION_MATCH_RADIUS_METERS", constants.LOCATION_MATCH_RADIUS_METERS)
WORK_LOCATION_RADIUS_METERS = _env_float("WORK_LOCATION_RADIUS_METERS", constants.WORK_LOCATION_RADIUS_METERS)
LATE_HOUR = int(os.getenv("LATE_HOUR", str(constants.LATE_HOUR)))

# Selfie storage
PHOTO_STORAGE_DIR = os.getenv("PHOTO_STORAGE_DIR", "static/selfies")
PHOTO_BASE_URL = os.getenv("PHOTO_BASE_URL", "/static/selfies")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
