# backend/scanverdict/models/history_record.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from scanverdict.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryRecord(Base):
    """
    One JSON document per storage key. The whole scan history lives in a
    single row, newest first.
    """

    __tablename__ = "scan_history"

    key = Column(String, primary_key=True, index=True)
    payload = Column(Text, nullable=True)  # JSON list of history items
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
