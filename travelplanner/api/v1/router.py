"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the travel planner
"""

from fastapi import APIRouter

from travelplanner.api.v1 import calendar, locations, trips

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(trips.router)
router.include_router(calendar.router)
router.include_router(locations.router)

__all__ = ["router"]
