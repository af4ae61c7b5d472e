from fastapi import FastAPI
from contextlib import asynccontextmanager

from crm_notifications.interfaces.api.routes import register_routes
from crm_notifications.infrastructure.database import initialize_database, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="CRM Notification Engine", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
