"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SECONDS_PER_HOUR = 3600.0

REGULAR_DAILY_HOURS = 8.0
REGULAR_WEEKLY_HOURS = 40.0
OVERTIME_MULTIPLIER = 1.5

DAYS_PER_WEEK = 7
DEFAULT_HOURLY_RATE = 15.0
