# inventory/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from rich.logging import RichHandler
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .core import ProductIn, StockUpdateIn
from .database import JsonFileStorage
from .service import InventoryService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


# ---------------------------
# Error mapping: every failure is {"error": "..."}
# ---------------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error."})

async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"error": "Invalid request body."})
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = loc[-1] if loc else "body"
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid value for '{field}': {first.get('msg', 'invalid')}."},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    storage = JsonFileStorage(
        settings.data_file,
        policy=settings.storage_policy,
        fallback_dir=settings.fallback_dir,
        atomic_writes=settings.atomic_writes,
    )
    service = InventoryService(storage, mask_read_failures=settings.mask_read_failures)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        path = storage.ensure_available()
        logger.info("Data stored in: %s", path)
        yield

    app = FastAPI(title="inventory-api (JSON file store)", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/products")
    async def list_products():
        return await service.list_products()

    @app.get("/products/low-stock")
    async def low_stock_products():
        return await service.low_stock_products()

    @app.get("/products/{product_id}")
    async def get_product(product_id: int):
        return await service.get_product(product_id)

    @app.post("/update-stock")
    async def update_stock(payload: StockUpdateIn):
        return await service.update_stock(payload)

    @app.post("/add-product")
    async def add_product(payload: ProductIn):
        return await service.add_product(payload)

    # ---------------------------
    # Utility
    # ---------------------------
    @app.get("/health")
    async def health():
        return {"status": "ok", "dataFile": str(storage.active_path or storage.data_file)}

    return app


app = create_app()


def main():
    import uvicorn

    settings: Settings = app.state.settings
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
