# sthash/api/routes.py
# Token generation endpoints. Matching token lists between parties happens elsewhere.

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.concurrency import run_in_threadpool
import structlog
from typing import List

from sthash.core.config import settings
from sthash.models.dto import (
    ConfigResponse,
    ErrorResponse,
    HashConfig,
    HashRequest,
    HashResponse,
    SpacetimeRecord,
    TimelineHashRequest,
)
from sthash.services.spacetime_hasher import count_tokens_for_records, hash_records
from sthash.services.timeline import records_from_timeline
from sthash.utils.haversine import cell_size_meters

router = APIRouter()
logger = structlog.get_logger(__name__)

def _check_batch_size(count: int):
    if count > settings.MAX_RECORDS_PER_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorResponse(
                error="TOO_MANY_RECORDS",
                detail=f"At most {settings.MAX_RECORDS_PER_REQUEST} records per request, got {count}.",
            ).model_dump(),
        )


def _check_token_budget(records: List[SpacetimeRecord], config: HashConfig):
    expected = count_tokens_for_records(records, config)
    if expected > settings.MAX_TOKENS_PER_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorResponse(
                error="TOO_MANY_TOKENS",
                detail=f"Request would produce {expected} tokens, at most {settings.MAX_TOKENS_PER_REQUEST} allowed. "
                       "Use a larger time step, a smaller spread_out or fewer records.",
            ).model_dump(),
        )


async def _hash(request: Request, records: List[SpacetimeRecord], config: HashConfig) -> HashResponse:
    _check_batch_size(len(records))
    _check_token_budget(records, config)
    executor = getattr(request.app.state, "hash_executor", None)
    # Hashing is CPU bound; keep it off the event loop
    tokens = await run_in_threadpool(hash_records, records, config, executor)
    logger.info(
        "records_hashed",
        records=len(records),
        tokens=sum(len(t) for t in tokens),
        spread_out=config.spread_out,
        latlng_precision=config.latlng_precision,
    )
    return HashResponse(tokens=tokens, count=len(tokens))

# ----------------------------------------------------------------------
# Hash Endpoints
# ----------------------------------------------------------------------
@router.post(
    "/hash",
    response_model=HashResponse,
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def hash_spacetime_records(request: Request, data: HashRequest):
    """Hash each record with the request's parameters, falling back to the configured defaults."""
    config = data.to_config(settings)
    return await _hash(request, data.records, config)


@router.post(
    "/hash/timeline",
    response_model=HashResponse,
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def hash_timeline(request: Request, data: TimelineHashRequest):
    """Hash every placeVisit of a location history export."""
    config = data.to_config(settings)
    # Upper bound: non-placeVisit objects are dropped during conversion
    _check_batch_size(len(data.timeline_objects))
    records = records_from_timeline(data.timeline_objects)
    return await _hash(request, records, config)

# ----------------------------------------------------------------------
# Config Endpoint
# ----------------------------------------------------------------------
@router.get("/config", response_model=ConfigResponse)
async def get_config():
    step = 10 ** settings.LATLNG_PRECISION
    height, width = cell_size_meters(0.0, step, step)
    return ConfigResponse(
        time_step_minutes=settings.TIME_STEP_MINUTES,
        latlng_precision=settings.LATLNG_PRECISION,
        spread_out=settings.SPREAD_OUT,
        key_configured=bool(settings.HASH_KEY),
        cell_height_m=round(height, 2),
        cell_width_m=round(width, 2),
    )
