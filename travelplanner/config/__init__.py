"""
Configuration package for the travel planner service.
"""

from travelplanner.config.settings import settings, get_settings, Settings

__all__ = ['settings', 'get_settings', 'Settings']
