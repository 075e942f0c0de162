# backend/scanverdict/services/history/history_store_service.py

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scanverdict.core.config import settings
from scanverdict.db.session import SessionLocal
from scanverdict.models.history_record import HistoryRecord

logger = logging.getLogger(__name__)


class HistoryStoreService:
    """
    Bounded, newest-first scan history kept as a single JSON document under
    one fixed key.

    Missing or corrupted storage reads as an empty history; write failures
    are logged and reported as False instead of raised.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        storage_key: Optional[str] = None,
        max_items: Optional[int] = None,
    ) -> None:
        self._session_factory = session_factory or SessionLocal
        self.storage_key = storage_key or settings.HISTORY_STORAGE_KEY
        self.max_items = max_items or settings.HISTORY_MAX_ITEMS

    def _get_db(self) -> Session:
        return self._session_factory()

    # --------------------------------------------------------
    # Read
    # --------------------------------------------------------
    def load_history(self) -> List[dict]:
        db = self._get_db()
        try:
            record = db.get(HistoryRecord, self.storage_key)
            if record is None or not record.payload:
                return []
            parsed = json.loads(record.payload)
        except (SQLAlchemyError, ValueError) as exc:
            logger.error("Failed to load history: %s", exc)
            return []
        finally:
            db.close()

        if not isinstance(parsed, list):
            logger.warning("Stored history is not a list; ignoring it")
            return []
        return parsed

    # --------------------------------------------------------
    # Write
    # --------------------------------------------------------
    def save_history(self, history: Any) -> bool:
        """
        Persist at most max_items entries (the first ones, i.e. newest).
        """
        if not isinstance(history, list):
            logger.error("History must be a list, got %s", type(history).__name__)
            return False

        trimmed = history[: self.max_items]
        db = self._get_db()
        try:
            payload = json.dumps(trimmed, default=str)
            record = db.get(HistoryRecord, self.storage_key)
            if record is None:
                db.add(HistoryRecord(key=self.storage_key, payload=payload))
            else:
                record.payload = payload
            db.commit()
            return True
        except (SQLAlchemyError, TypeError, ValueError):
            db.rollback()
            logger.exception("Failed to save history")
            return False
        finally:
            db.close()

    def add_to_history(self, url: str, result: Any) -> List[dict]:
        item = {
            "url": url,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "result": result,
        }
        updated = [item, *self.load_history()]
        self.save_history(updated)
        return updated[: self.max_items]

    def clear_history(self) -> bool:
        db = self._get_db()
        try:
            db.query(HistoryRecord).filter(
                HistoryRecord.key == self.storage_key
            ).delete()
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to clear history")
            return False
        finally:
            db.close()

    def remove_history_item(self, index: int) -> List[dict]:
        history = self.load_history()
        if 0 <= index < len(history):
            del history[index]
            if not self.save_history(history):
                return self.load_history()
        return history


history_store_service = HistoryStoreService()
