from contextlib import asynccontextmanager

from fastapi import FastAPI

from .database import init_db
from .routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover
    init_db()
    yield


def create_app() -> FastAPI:
    """Application factory for the league schedule service."""
    app = FastAPI(title="League Schedule Builder", lifespan=lifespan)
    app.include_router(router)
    return app


app = create_app()
