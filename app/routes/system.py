from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.repositories import order_store
from app.schemas.system import HealthCheckResponse, SystemMetricsResponse

router = APIRouter(tags=["System"])
logger = structlog.get_logger(__name__)


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Lightweight public health check.
    Returns ok + DB connectivity check (SELECT 1).
    """
    now = datetime.utcnow()
    start_time = getattr(request.app.state, "start_time", now)
    uptime_seconds = (now - start_time).total_seconds()

    db_ok = True
    extra = {}
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db_ok = False
        extra["db_error"] = str(e)
        logger.error("health_db_check_failed", error=str(e))

    return HealthCheckResponse(
        status="ok" if db_ok else "degraded",
        now=now,
        uptime_seconds=uptime_seconds,
        db_ok=db_ok,
        extra=extra or None,
    )


@router.get("/metrics", response_model=SystemMetricsResponse)
def system_metrics(request: Request, db: Session = Depends(get_db)):
    """
    In-process request counters from MetricsMiddleware plus order figures
    read from the database.
    """
    now = datetime.utcnow()
    start_time = getattr(request.app.state, "start_time", now)
    uptime_seconds = (now - start_time).total_seconds()

    metrics = getattr(request.app.state, "metrics", None) or {}
    requests_count = int(metrics.get("requests", 0))
    total_response_ms = float(metrics.get("total_response_ms", 0.0))
    avg_response_ms = (total_response_ms / requests_count) if requests_count > 0 else None

    orders_by_status = order_store.count_by_status(db)

    return SystemMetricsResponse(
        uptime_seconds=uptime_seconds,
        now=now,
        requests_count=requests_count,
        error_count=int(metrics.get("errors", 0)),
        avg_response_ms=avg_response_ms,
        orders_by_status=orders_by_status,
        total_orders=sum(orders_by_status.values()),
        paid_revenue=order_store.paid_revenue(db),
    )
