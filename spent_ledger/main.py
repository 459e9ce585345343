"""
Spent Ledger: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from spent_ledger.config import get_settings
from spent_ledger.api.health import router as health_router
from spent_ledger.api.containers import router as containers_router
from spent_ledger.api.accounts import router as accounts_router
from spent_ledger.api.categories import router as categories_router
from spent_ledger.api.transactions import router as transactions_router
from spent_ledger.api.reports import router as reports_router
from spent_ledger.api.settings import router as settings_router
from spent_ledger.models.base import Base, SessionLocal, engine
from spent_ledger.services.category_service import CategoryService
from spent_ledger.services.container_service import ContainerService

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("spent_ledger")


def init_db() -> None:
    """Create missing tables and seed the default container and categories."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ContainerService(db).ensure_default()
        CategoryService(db).seed_defaults()
        db.commit()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Bookkeeping engine: accounts, transfers, profit-and-loss and balance sheet",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(containers_router)
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(reports_router)
app.include_router(settings_router)


def run() -> None:
    uvicorn.run(
        "spent_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
