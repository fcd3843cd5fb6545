from contextlib import asynccontextmanager

from fastapi import FastAPI

from trainload.config import get_settings
from trainload.logging_config import configure_logging
from trainload.routers import insights, timer


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title=get_settings().app_name, lifespan=lifespan)

app.include_router(insights.router, prefix="/api/insights", tags=["insights"])
app.include_router(timer.router, prefix="/api/timer", tags=["timer"])
