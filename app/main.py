from contextlib import asynccontextmanager
from datetime import datetime

import structlog
from fastapi import FastAPI

from app.core.error_handlers import register_exception_handlers
from app.core.logging import configure_logging
from app.database.connection import Base, engine
from app.middleware.metrics import MetricsMiddleware, new_metrics
from app.models import customer, order, product  # noqa: F401  (register tables)
from app.routes import system
from app.routes.customers import router as customer_router
from app.routes.orders import router as order_router
from app.routes.products import router as product_router

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    app.state.start_time = datetime.utcnow()
    app.state.metrics = new_metrics()
    logger.info("application_started")
    yield
    logger.info("application_stopped")


app = FastAPI(title="Smart Inventory & Order System", lifespan=lifespan)

app.add_middleware(MetricsMiddleware)
register_exception_handlers(app)

app.include_router(customer_router)
app.include_router(product_router)
app.include_router(order_router)
app.include_router(system.router)
