from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend import RoomStore, create_store
from constants import SWEEP_ENABLED
from routers.sweeps import sweeps_router
from scheduler import SweepScheduler
from schemas.sweeps import HealthResponse
from sweeper import SweepEngine
from logging_config import get_logger

logger = get_logger(__name__)


def create_app(store: RoomStore = None, enable_scheduler: bool = SWEEP_ENABLED) -> FastAPI:
    store = store or create_store()
    engine = SweepEngine(store)
    scheduler = SweepScheduler(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if enable_scheduler:
            scheduler.start()
        else:
            logger.info("Scheduled room sweep disabled")
        try:
            yield
        finally:
            scheduler.shutdown()
            close = getattr(store, "close", None)
            if close is not None:
                await close()

    app = FastAPI(title="Room Sweeper", lifespan=lifespan)
    app.state.engine = engine
    app.state.scheduler = scheduler
    app.include_router(sweeps_router)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            status="ok",
            scheduler_running=scheduler.running,
            next_run_at=scheduler.next_run_at(),
        )

    logger.info("FastAPI application initialized")
    return app

