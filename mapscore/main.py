from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response

from mapscore import __version__
from mapscore.core.config import settings
from mapscore.core.logging import configure_logging, correlation_context, get_logger
from mapscore.core.numeric import round_to
from mapscore.engine.norms import get_reference_tables
from mapscore.engine.projection import load_parameters
from mapscore.routers.exceptions import register_exception_handlers
from mapscore.routers.norms import router as norms_router
from mapscore.routers.projections import router as projections_router


configure_logging(level=settings.log_level, environment=settings.environment)
logger = get_logger("mapscore.main", component="app")

_app_start_time = datetime.now(timezone.utc)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load reference data before serving.

    Invalid tables or parameters raise here and abort startup instead of
    being discovered on the first chart request.
    """
    if settings.preload_norms:
        tables = get_reference_tables()
        load_parameters()
        logger.info("startup_reference_data_ready", extra={"structured_data": tables.stats()})
    yield


app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug, lifespan=lifespan)
register_exception_handlers(app)

app.include_router(norms_router)
app.include_router(projections_router)


@app.middleware("http")
async def bind_correlation_id(request: Request, call_next):
    with correlation_context(request.headers.get(REQUEST_ID_HEADER)) as correlation_id:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response


@app.get("/health")
def health():
    """Uptime, version and the reference tables currently in use."""
    now = datetime.now(timezone.utc)
    return {
        "status": "healthy",
        "version": __version__,
        "started_at": _app_start_time.isoformat(),
        "uptime_seconds": round_to((now - _app_start_time).total_seconds(), 2),
        "environment": settings.environment,
        "norms": get_reference_tables().stats(),
    }


@app.get("/", include_in_schema=False)
def root():
    return {
        "name": settings.app_name,
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(status_code=204)
