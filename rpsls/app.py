from contextlib import asynccontextmanager

from fastapi import FastAPI

from rpsls.api.main import api_router
from rpsls.config import settings
from rpsls.log import setup_logging
from rpsls.services.random_source import random_source


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await random_source.aclose()


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title="rpsls", version="0.1.0", lifespan=lifespan)
    app.include_router(api_router)
    return app


app = create_app()
