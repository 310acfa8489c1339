from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import structlog

# Local imports
from sthash.core.config import settings
from sthash.core.errors import ConfigurationError, InvalidArgument
from sthash.logging import configure_logging
from sthash.middleware.logging import LoggingMiddleware
from sthash.models.dto import ErrorResponse
from sthash.api.routes import router as api_router

configure_logging(settings.ENV, settings.LOG_LEVEL)
logger = structlog.get_logger(__name__)

# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("application_startup", version=settings.VERSION, env=settings.ENV)
    if not settings.HASH_KEY:
        logger.warning("hash_key_not_configured", detail="Requests must carry their own key.")

    app.state.hash_executor = None
    if settings.HASH_WORKERS > 0:
        app.state.hash_executor = ThreadPoolExecutor(
            max_workers=settings.HASH_WORKERS, thread_name_prefix="sthash"
        )
        logger.info("hash_executor_started", workers=settings.HASH_WORKERS)

    yield

    logger.info("application_shutdown")
    if app.state.hash_executor is not None:
        app.state.hash_executor.shutdown(wait=True)

# --- FastAPI Application Initialization ---
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.BRIEF_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

# --- API Routes ---
app.include_router(api_router, prefix="/api")

# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    return {
        "status": "ok",
        "version": settings.VERSION,
    }

# --- Exception Handlers ---
@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.warning("invalid_argument", error=exc.detail)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ErrorResponse(error=exc.code, detail=exc.detail).model_dump(exclude_none=True)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("configuration_error", error=exc.detail)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": ErrorResponse(error=exc.code, detail=exc.detail).model_dump(exclude_none=True)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    error_id = str(uuid.uuid4())
    logger.error("unhandled_exception", error_id=error_id, error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                detail="An unexpected error occurred. Please report this error ID.",
                error_id=error_id,
            ).model_dump()
        },
    )
