# backend/scanverdict/api/v1/routes_history.py

from typing import List

from fastapi import APIRouter

from scanverdict.schemas.history import HistoryClearResponse, HistoryItem
from scanverdict.services.history.history_store_service import history_store_service

router = APIRouter(
    prefix="/history",
    tags=["history"],
)


@router.get("", response_model=List[HistoryItem], summary="Recent scans, newest first")
def list_history() -> List[dict]:
    return [item for item in history_store_service.load_history() if isinstance(item, dict)]


@router.delete("", response_model=HistoryClearResponse, summary="Clear scan history")
def clear_history() -> HistoryClearResponse:
    return HistoryClearResponse(cleared=history_store_service.clear_history())


@router.delete(
    "/{index}",
    response_model=List[HistoryItem],
    summary="Remove one history entry",
)
def remove_history_item(index: int) -> List[dict]:
    """
    Out-of-range indexes are ignored; the current history is returned either way.
    """
    history = history_store_service.remove_history_item(index)
    return [item for item in history if isinstance(item, dict)]
