import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tripsplit.core.config import settings
from tripsplit.core.db_check import wait_for_db
from tripsplit.core.errors import RollbackError, StorageError, ValidationError
from tripsplit.api.v1.routes.system import router as system_router
from tripsplit.api.v1.routes.group import router as group_router
from tripsplit.api.v1.routes.expense import router as expense_router
from tripsplit.api.v1.routes.payment import router as payment_router
from tripsplit.api.v1.routes.balance import router as balance_router
from tripsplit.api.v1.routes.document import router as document_router
from tripsplit.api.v1.routes.photo import router as photo_router
from tripsplit.api.v1.routes.package import router as package_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await wait_for_db(retries=settings.DB_CONNECT_RETRIES)
    yield


app = FastAPI(title="TripSplit Backend", lifespan=lifespan)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message, "rule": exc.rule})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(
        status_code=503,
        content={"detail": "Failed to save changes. Please try again."},
    )


@app.exception_handler(RollbackError)
async def rollback_error_handler(request: Request, exc: RollbackError):
    logger.critical("Unrecovered partial write on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Something went wrong while saving. Support has been notified."},
    )


@app.get("/")
async def root():
    return {"message": "TripSplit Backend is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(payment_router, prefix="/api/v1/payments")
app.include_router(balance_router, prefix="/api/v1/balances")
app.include_router(document_router, prefix="/api/v1/documents")
app.include_router(photo_router, prefix="/api/v1/photos")
app.include_router(package_router, prefix="/api/v1/packages")
