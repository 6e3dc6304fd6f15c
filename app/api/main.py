from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.api.errors import (
    batch_import_rejected_handler,
    single_import_rejected_handler,
    store_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.api.routes_deals import router as deals_router
from app.api.routes_health import APP_VERSION, router as health_router
from app.api.routes_seed import router as seed_router
from app.config import configure_logging, load_settings
from app.deals.errors import BatchImportRejected, DealStoreError, SingleImportRejected

configure_logging(load_settings())

app = FastAPI(
    title="FX Deals Data Warehouse",
    version=APP_VERSION,
    description="Validates FX deal records and stores them keyed by deal id",
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SingleImportRejected, single_import_rejected_handler)
app.add_exception_handler(BatchImportRejected, batch_import_rejected_handler)
app.add_exception_handler(DealStoreError, store_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)
app.include_router(deals_router)
app.include_router(seed_router)
app.include_router(health_router)
