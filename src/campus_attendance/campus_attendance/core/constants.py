"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

MOBILE_NUMBER_DIGITS = 10
MIN_YEAR = 1
MAX_YEAR = 4

# Placeholder class length used when a timetable row has no end time.
DEFAULT_CLASS_MINUTES = 60

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
