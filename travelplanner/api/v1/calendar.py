"""
Calendar endpoints over the requester's own trips.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from travelplanner.api import deps
from travelplanner.schemas.calendar import (
    DateRangeCalendarResponse,
    DayCalendarResponse,
    MonthCalendarResponse,
    YearOverviewResponse,
)
from travelplanner.schemas.common.response import SuccessResponse
from travelplanner.services.trip.calendar_service import CalendarService

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/month", response_model=SuccessResponse[MonthCalendarResponse])
def month_view(
    year: int = Query(..., description="Calendar year"),
    month: int = Query(..., description="Month number, 1-12"),
    requester_id: str = Depends(deps.get_current_user_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_trips_for_month(requester_id, year, month)))


@router.get("/date-range", response_model=SuccessResponse[DateRangeCalendarResponse])
def date_range_view(
    start_date: date = Query(...),
    end_date: date = Query(...),
    requester_id: str = Depends(deps.get_current_user_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    result = service.get_trips_for_date_range(requester_id, start_date, end_date)
    return SuccessResponse.create(deps.unwrap_result(result))


@router.get("/day", response_model=SuccessResponse[DayCalendarResponse])
def day_view(
    day: date = Query(..., alias="date"),
    requester_id: str = Depends(deps.get_current_user_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_trips_for_day(requester_id, day)))


@router.get("/year-overview", response_model=SuccessResponse[YearOverviewResponse])
def year_overview(
    year: int = Query(...),
    requester_id: str = Depends(deps.get_current_user_id),
    service: CalendarService = Depends(deps.get_calendar_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_yearly_overview(requester_id, year)))
