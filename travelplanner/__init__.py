"""Travel planner backend: multi-city itineraries, calendars and regional recommendations."""

__version__ = "1.0.0"
