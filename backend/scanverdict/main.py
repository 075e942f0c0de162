from contextlib import asynccontextmanager

from fastapi import FastAPI


from scanverdict.api.v1.routes_health import router as health_router
from scanverdict.api.v1.routes_scan import router as scan_router
from scanverdict.api.v1.routes_details import router as details_router
from scanverdict.api.v1.routes_history import router as history_router

from scanverdict.db.init_db import init_db
from scanverdict.core.config import settings
from scanverdict.core.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    # Create DB tables if they don't exist (dev only)
    init_db()
    yield


app = FastAPI(
    title="URL Scan Verdict Service",
    version="0.1.0",
    description="Normalizes URL scan aggregator output and decides risk verdicts.",
    lifespan=lifespan,
)


@app.get("/", tags=["root"])
async def root() -> dict:
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
    }


# API v1
app.include_router(health_router, prefix="/api/v1")
app.include_router(scan_router, prefix="/api/v1")
app.include_router(details_router, prefix="/api/v1")
app.include_router(history_router, prefix="/api/v1")
