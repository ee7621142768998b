"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6
MIN_CAPACITY = 1
# Format produced by <input type="datetime-local">
EVENT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M"
