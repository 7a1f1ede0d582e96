import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.customers import router as customers_router
from app.api.dashboard import router as dashboard_router
from app.api.invoices import router as invoices_router
from app.config import get_settings
from app.db.engine import with_async_engine
from app.db.errors import DataFetchError

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    async with with_async_engine(settings) as engine:
        app.state.engine = engine
        logger.info("Database engine ready")
        yield


app = FastAPI(
    title="Invoice Dashboard Data API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(DataFetchError)
async def data_fetch_error_handler(request: Request, exc: DataFetchError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(dashboard_router)
app.include_router(customers_router)
app.include_router(invoices_router)
