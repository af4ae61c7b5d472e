from fastapi import FastAPI

from .cron import router as cron_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(cron_router)
    app.include_router(notifications_router)
