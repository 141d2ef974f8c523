"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

# Check-in fix vs check-out fix (legacy rule, used when no work station is assigned).
LOCATION_MATCH_RADIUS_METERS = 100.0
# Fix vs registered work station.
WORK_LOCATION_RADIUS_METERS = 1000.0

STANDARD_WORKING_HOURS = 8.0
AUTO_CHECKOUT_AFTER_HOURS = 9.0
LATE_HOUR = 9

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_RECENT_LIMIT = 5

GPS_TIMEOUT_MS = 10_000
GPS_MAX_AGE_MS = 0

PLACEHOLDER = "-"
