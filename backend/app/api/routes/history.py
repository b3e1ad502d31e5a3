"""
History and preferences routes.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_history_service
from app.models.summary import SummaryHistoryItem, UserPreferences
from app.services.history_service import HistoryService
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/history", response_model=List[SummaryHistoryItem], response_model_by_alias=True)
def get_history(history: HistoryService = Depends(get_history_service)):
    return history.get_history()


@router.delete("/history/{summary_id}")
def delete_history_item(summary_id: str, history: HistoryService = Depends(get_history_service)):
    if not history.delete_summary(summary_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Summary {summary_id} not found")
    return {"deleted": summary_id}


@router.get("/preferences", response_model=UserPreferences, response_model_by_alias=True)
def get_preferences(history: HistoryService = Depends(get_history_service)):
    return history.get_preferences()


@router.put("/preferences", response_model=UserPreferences, response_model_by_alias=True)
def save_preferences(preferences: UserPreferences, history: HistoryService = Depends(get_history_service)):
    logger.info("Saving user preferences")
    return history.save_preferences(preferences)
