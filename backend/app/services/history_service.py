"""
History Service - summary history and user preferences in the key-value store.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import KeyValue
from app.models.summary import SummaryHistoryCreate, SummaryHistoryItem, UserPreferences
from app.utils.logger import get_logger

logger = get_logger(__name__)

HISTORY_KEY = "summary_history"
PREFERENCES_KEY = "user_preferences"


class HistoryService:
    """
    Newest-first summary history capped at HISTORY_LIMIT entries, plus one
    preferences record.
    """
    def __init__(self, db_session: Session, history_limit: Optional[int] = None):
        self.db = db_session
        self.history_limit = history_limit or settings.HISTORY_LIMIT
        logger.debug("HistoryService initialized with database session.")

    # ==================== History ====================

    def save_summary(self, item: SummaryHistoryCreate) -> SummaryHistoryItem:
        """Assign id and date, prepend, and drop the oldest beyond the cap."""
        new_item = SummaryHistoryItem(
            id=uuid.uuid4().hex,
            date=datetime.now(timezone.utc),
            **item.model_dump(),
        )

        history = [new_item] + self.get_history()
        self._write(HISTORY_KEY, [
            entry.model_dump(mode="json", by_alias=True) for entry in history[:self.history_limit]
        ])
        logger.info(f"Saved summary {new_item.id} to history")
        return new_item

    def get_history(self) -> List[SummaryHistoryItem]:
        """Stored history, newest first; a corrupt value reads as empty."""
        raw = self._read(HISTORY_KEY)
        if raw is None:
            return []

        try:
            return [SummaryHistoryItem.model_validate(entry) for entry in raw]
        except (TypeError, ValidationError) as e:
            logger.error(f"Failed to parse summary history: {e}")
            return []

    def delete_summary(self, summary_id: str) -> bool:
        history = self.get_history()
        remaining = [entry for entry in history if entry.id != summary_id]

        if len(remaining) == len(history):
            return False

        self._write(HISTORY_KEY, [entry.model_dump(mode="json", by_alias=True) for entry in remaining])
        logger.info(f"Deleted summary {summary_id} from history")
        return True

    # ==================== Preferences ====================

    def get_preferences(self) -> UserPreferences:
        raw = self._read(PREFERENCES_KEY)
        if raw is None:
            return UserPreferences()

        try:
            return UserPreferences.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Failed to parse user preferences: {e}")
            return UserPreferences()

    def save_preferences(self, preferences: UserPreferences) -> UserPreferences:
        self._write(PREFERENCES_KEY, preferences.model_dump(mode="json", by_alias=True))
        return preferences

    # ==================== Storage ====================

    def _read(self, key: str) -> Any:
        row = self.db.get(KeyValue, key)
        return row.value if row is not None else None

    def _write(self, key: str, value: Any) -> None:
        try:
            row = self.db.get(KeyValue, key)
            if row is None:
                self.db.add(KeyValue(key=key, value=value))
            else:
                row.value = value
            self.db.commit()
        except Exception as e:
            logger.error(f"Database error writing '{key}': {e}", exc_info=True)
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Database operation failed.")
