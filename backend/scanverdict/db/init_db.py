# backend/scanverdict/db/init_db.py

from scanverdict.db.session import engine
from scanverdict.db.base_class import Base

# Import models so they are registered with Base.metadata
from scanverdict.models import history_record  # noqa: F401


def init_db() -> None:
    """
    Create all tables (development only).
    """
    Base.metadata.create_all(bind=engine)
