"""History router."""

import datetime
from typing import Optional

from fastapi import APIRouter, Query

from postsmith.dependencies import CurrentUserRequired, HistoryServiceDep, RateLimitGuard
from postsmith.schemas.history import HistoryItemResponse, HistoryResponse
from postsmith.services.history_service import HistoryFilters
from postsmith.services.validation import sanitize

router = APIRouter(dependencies=[RateLimitGuard])


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    user: CurrentUserRequired,
    history: HistoryServiceDep,
    platform: Optional[str] = Query(None, description="Exact platform match"),
    tone: Optional[str] = Query(None, description="Exact tone match"),
    date: Optional[datetime.date] = Query(None, description="Creation date, YYYY-MM-DD (UTC)"),
) -> HistoryResponse:
    """Newest-first generations for the caller, filtered by every given field."""
    filters = HistoryFilters(
        platform=sanitize(platform) or None,
        tone=sanitize(tone) or None,
        date=date,
    )
    items = await history.query(user.uid, filters)
    return HistoryResponse(history=[HistoryItemResponse.from_item(i) for i in items])
