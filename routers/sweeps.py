from fastapi import APIRouter, HTTPException, Request
from errors import FetchError
from schemas.sweeps import SweepReport
from logging_config import get_logger

logger = get_logger(__name__)

sweeps_router = APIRouter(prefix="/sweeps", tags=["sweeps"])


@sweeps_router.post("", response_model=SweepReport)
async def trigger_sweep(request: Request):
    client_host = request.client.host if request.client else 'unknown'
    logger.info(f"Manual sweep requested from {client_host}")

    engine = request.app.state.engine
    try:
        result = await engine.run_sweep()
    except FetchError as e:
        logger.error(f"Manual sweep aborted: {e}")
        raise HTTPException(status_code=503, detail="Room store unavailable")

    logger.info(f"Manual sweep finished: deleted={result.deleted_count} failed={result.failed_count}")
    return result.to_report()


@sweeps_router.get("/last", response_model=SweepReport)
async def last_sweep(request: Request):
    """
    Report of the most recent completed sweep, scheduled or manual.
    """
    result = request.app.state.engine.last_result
    if result is None:
        raise HTTPException(status_code=404, detail="No sweep has run yet")
    return result.to_report()
