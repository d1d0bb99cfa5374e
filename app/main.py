"""
Event Store - owner-gated record store for asset events.

Features:
- Create, read, filter, update, end and delete events
- Structured logging with correlation IDs
- Prometheus metrics
- Health checks (liveness and readiness)
"""
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from .config import get_settings
from .logging import setup_logging, get_logger
from .api.router import router
from .middleware import (
    CorrelationIdMiddleware,
    ErrorHandlerMiddleware,
    MetricsMiddleware,
    ValidationMiddleware,
)
from .metrics import Metrics
from .health import HealthChecker
from .services.event_store import EventStore, get_event_store, set_metrics

VERSION = "0.1.0"

settings = get_settings()

setup_logging(json_output=settings.LOG_JSON, level=settings.LOG_LEVEL)
logger = get_logger()

metrics = Metrics(service_name="eventstore", version=VERSION)
health_checker = HealthChecker(service_name="eventstore", version=VERSION)

set_metrics(metrics)

app = FastAPI(
    title="Event Store",
    version=VERSION,
    description="Persistent event records with owner-gated mutation",
)

# Last added runs first: correlation ID wraps everything else
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(ValidationMiddleware)
app.add_middleware(MetricsMiddleware, metrics=metrics)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(router)

metrics_app = make_asgi_app(registry=metrics.registry)
app.mount("/metrics", metrics_app)


@app.get("/health")
async def health():
    """
    Liveness probe - basic health check.

    Returns 200 if service is running.
    """
    logger.debug("health_check_liveness")
    return health_checker.liveness()


@app.get("/health/ready")
async def health_ready(store: EventStore = Depends(get_event_store)):
    """
    Readiness probe - comprehensive health check.

    Returns:
        200: Service is ready to handle traffic
        503: Service is not ready
    """
    logger.debug("health_check_readiness")
    metrics.update_system_metrics()
    result = await health_checker.readiness(store)
    status_code = 200 if result["status"] == "ready" else 503
    return JSONResponse(content=result, status_code=status_code)


@app.on_event("startup")
async def startup_event():
    logger.info(
        "service_starting",
        version=VERSION,
        env=settings.ENV,
        store_adapter=settings.STORE_ADAPTER,
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("service_stopping")
    metrics.app_up.labels(service="eventstore", version=VERSION).set(0)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.SERVICE_PORT,
        reload=True,
    )
