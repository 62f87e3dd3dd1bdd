"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 50
DEFAULT_ATTENDANCE_PAGE_SIZE = 100
DEFAULT_ACTIVITY_LIMIT = 20
DASHBOARD_RECENT_ENTRIES = 10
TOP_LOCATIONS_LIMIT = 10
CSV_ERROR_REPORT_LIMIT = 10
MIN_PAYMENT_YEAR = 2000
MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
