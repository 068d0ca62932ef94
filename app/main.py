import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import AppConfig, load_config
from app.domain.errors import BlobStoreError
from app.features.blobs.api import NO_FILE_PART
from app.features.blobs.api import router as blobs_router
from app.infra.hooks import LoggingWriteHooks
from app.infra.locks import build_lock
from app.infra.log import configure_logging
from app.infra.storage import BlobStore
from app.web.access_log import AccessLogMiddleware
from app.web.health import router as health_router

logger = logging.getLogger(__name__)


async def blob_store_error_handler(request: Request, exc: BlobStoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    locs = [tuple(err.get("loc", ())) for err in exc.errors()]
    message = NO_FILE_PART if ("body", "file") in locs else "Invalid request"
    logger.info("%s %s rejected: %s", request.method, request.url.path, locs)
    return JSONResponse(status_code=400, content={"error": message})


def create_app(cfg: AppConfig | None = None) -> FastAPI:
    cfg = cfg or load_config()
    configure_logging(cfg.log_level)

    store = BlobStore(cfg.store_dir, lock=build_lock(cfg.lock_mode), hooks=LoggingWriteHooks())
    try:
        store.ensure_root()
    except OSError as e:
        raise RuntimeError(f"Could not create store directory {cfg.store_dir}: {e}") from e

    app = FastAPI(title="Content-Addressed Blob Store", version="0.1.0")
    app.state.cfg = cfg
    app.state.store = store
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BlobStoreError, blob_store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.include_router(health_router)
    app.include_router(blobs_router)
    logger.info("Blob store at %s (lock mode: %s)", cfg.store_dir, cfg.lock_mode.value)
    return app
