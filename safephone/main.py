import asyncio
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from safephone.config import settings
from safephone.database import SessionLocal, init_db
from safephone.api import routes
from safephone.services.report_store import CommunityReportStore
from safephone.services.storage import SqlStorage

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_report_store() -> CommunityReportStore:
    return CommunityReportStore(
        SqlStorage(SessionLocal),
        endpoint=settings.APP_REPORTS_ENDPOINT or None,
        timeout=settings.SYNC_TIMEOUT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🚀 Starting {settings.APP_NAME}...")
    init_db()
    app.state.report_store = build_report_store()

    sync_task = None
    if settings.APP_REPORTS_ENDPOINT and settings.SYNC_ON_STARTUP:
        # Best-effort; the API serves requests while this runs
        sync_task = asyncio.create_task(app.state.report_store.sync_phones())
    yield
    # Shutdown
    if sync_task is not None and not sync_task.done():
        await sync_task
    logger.info(f"👋 Shutting down {settings.APP_NAME}...")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

# Include routers
app.include_router(routes.router, prefix=settings.API_PREFIX, tags=["Heuristics"])

@app.get("/")
def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.VERSION,
        "docs": "/docs"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("safephone.main:app", host="127.0.0.1", port=8000, reload=False)
