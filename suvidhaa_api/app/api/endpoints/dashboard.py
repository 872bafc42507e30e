"""
Dashboard endpoint.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from suvidhaa_api.app.api.deps import get_statistics_service, server_error
from suvidhaa_api.app.core.db import StoreError
from suvidhaa_api.app.core.exceptions import ServiceError
from suvidhaa_api.app.core.security import get_current_user
from suvidhaa_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/stats")
async def get_stats(
    current_user: dict = Depends(get_current_user),
    statistics: StatisticsService = Depends(get_statistics_service),
) -> Dict[str, Any]:
    """Booking figures for the caller's dashboard.

    Providers receive totals, pending and completed counts, revenue from
    completed bookings and their rating; customers receive their total and
    pending booking counts.
    """
    try:
        return await statistics.for_caller(current_user["user_id"], current_user["role"])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
