"""
Leave Compliance Service - Main Application Entry Point
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from leave_compliance.api.router import api_router
from leave_compliance.core.config import settings
from leave_compliance.core.errors import (
    ComplianceServiceError,
    compliance_error_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from leave_compliance.core.logging import setup_logging
from leave_compliance.core.rule_tables import load_rule_tables

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    try:
        parsed = urlparse(url)
        if parsed.scheme == "sqlite":
            return url
        if parsed.password:
            netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
            if parsed.port:
                netloc += f":{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc))
    except ValueError:
        return "***"
    return url


# Create FastAPI app
app = FastAPI(
    title="Leave Compliance Service",
    description="Leave policy compliance checks, summaries and balances",
    version=settings.VERSION or "1.0.0"
)

# Configure CORS - must be before other middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ComplianceServiceError, compliance_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL at startup so it can be verified against Alembic."""
    masked = _mask_database_url(settings.DATABASE_URL)
    logger.info("DATABASE_URL (app): %s", masked)


@app.on_event("startup")
def load_compliance_rules() -> None:
    """Load rule tables once; a bad rules file fails startup."""
    app.state.rule_tables = load_rule_tables(settings.COMPLIANCE_RULES_FILE)


@app.on_event("startup")
def start_read_executor() -> None:
    workers = settings.COMPLIANCE_READ_WORKERS
    if workers > 0:
        app.state.compliance_executor = ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="compliance-read",
        )
        logger.info("Compliance reads run on %d worker threads", workers)
    else:
        app.state.compliance_executor = None
        logger.info("Compliance reads run inline")


@app.on_event("shutdown")
def stop_read_executor() -> None:
    executor = getattr(app.state, "compliance_executor", None)
    if executor is not None:
        executor.shutdown(wait=True)
        app.state.compliance_executor = None


# Handle missing table errors with a clear message (SQLAlchemy OperationalError)
def _is_no_such_table(err: BaseException) -> bool:
    msg = str(err).lower()
    return "no such table" in msg or "does not exist" in msg


async def _handle_operational_error(request, exc: Exception):
    if _is_no_such_table(exc):
        return JSONResponse(
            status_code=500,
            content={"detail": "Run alembic upgrade head"},
        )
    return await generic_exception_handler(request, exc)


app.add_exception_handler(OperationalError, _handle_operational_error)
