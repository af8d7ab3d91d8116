# travelplanner/core/constants.py
"""
Core application constants.

These values centralize common constants such as pagination defaults and
header names so literals are not repeated across modules.
"""

# Pagination defaults
DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100
# Keeps (page - 1) * limit inside a 64-bit SQL integer
MAX_PAGE: int = 1_000_000

# Common HTTP header names
HEADER_CORRELATION_ID: str = "X-Correlation-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Message used for both missing and private trips
TRIP_NOT_FOUND_MESSAGE: str = "Trip not found or access denied"

# Placeholder when a trip has no stop cities yet
NO_DESTINATIONS: str = "No destinations"

# Location catalog listing sizes
CITY_PAGE_SIZE: int = 50
POPULAR_CITIES_LIMIT: int = 20
SUGGESTION_LIMIT: int = 20
