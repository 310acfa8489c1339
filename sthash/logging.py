import logging
import sys
from typing import Optional

import structlog
from sthash.core.config import settings

def configure_logging(env: Optional[str] = None, level: Optional[str] = None):
    """
    Configures structlog to intercept standard library logs.

    Args:
        env: Environment name; "development" renders colored console lines,
            anything else renders one JSON object per line. Defaults to settings.ENV.
        level: Root log level name. Defaults to settings.LOG_LEVEL.
    """
    is_local = (env or settings.ENV).lower() == "development"
    log_level = logging.getLevelName((level or settings.LOG_LEVEL).upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level or settings.LOG_LEVEL}")

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
    ]

    if is_local:
        # Human-readable while hashing records locally
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer()
        ]
    else:
        # One JSON object per line for log shipping
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer()
        ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # force=True so a later call (e.g. switching env) replaces the handler
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    # Route uvicorn's own loggers through the root handler configured above
    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
        logger = logging.getLogger(_log)
        logger.handlers = []
        logger.propagate = True
