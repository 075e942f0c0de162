# backend/scanverdict/db/session.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from scanverdict.core.config import settings

# SQLite needs this to be shared across FastAPI's worker threads
connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
