from typing import Optional
import logging
import math
import os
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .adapters.io.environment import ServiceConfig, load_service_config
from .adapters.io.errors import UnsafePathError, UploadNotFoundError
from .exceptions import (
    InvalidUploadError,
    TemplateRenderError,
    UploadConflictError,
    UploadRateLimitedError,
    UploadStorageError,
    UploadTooLargeError,
)
from .ratelimit.gate import UploadGate
from .security.csp import CSPMiddleware
from .startup import register_startup
from .templating import make_templates

logger = logging.getLogger(__name__)


class _SkipStaticAccessLogs(logging.Filter):
    """Hide uvicorn access logs for static assets and health probes."""
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True
        return "/static/" not in msg and "/healthz" not in msg

# Attach the filter once
_access_logger = logging.getLogger("uvicorn.access")
# Avoid duplicate filters on reload
if not any(isinstance(f, _SkipStaticAccessLogs) for f in getattr(_access_logger, "filters", [])):
    _access_logger.addFilter(_SkipStaticAccessLogs())

# Routers
from .routers.health import router as health_router
from .routers.pages import router as pages_router
from .routers.upload import router as upload_router
from .routers.images import router as images_router


# (exception type, status code, log level); first match wins
_ERROR_STATUS = (
    (InvalidUploadError, 400, logging.WARNING),
    (UnsafePathError, 403, logging.WARNING),
    (UploadNotFoundError, 404, logging.INFO),
    (UploadConflictError, 409, logging.WARNING),
    (UploadTooLargeError, 413, logging.WARNING),
    (UploadRateLimitedError, 429, logging.WARNING),
    (UploadStorageError, 500, logging.ERROR),
    (TemplateRenderError, 500, logging.ERROR),
)

# Client-facing messages for 5xx; the detail only goes to the log.
_SERVER_ERROR_TEXT = {
    UploadStorageError: "Error storing the file",
    TemplateRenderError: "Error rendering the page",
}


def _register_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code, level in _ERROR_STATUS:

        def handler(request: Request, exc: Exception, status_code=status_code, level=level):
            logger.log(level, "%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
            text = _SERVER_ERROR_TEXT.get(type(exc), str(exc))
            resp = PlainTextResponse(text, status_code=status_code)
            if isinstance(exc, UploadRateLimitedError):
                resp.headers["Retry-After"] = str(max(1, math.ceil(exc.retry_after)))
            return resp

        app.add_exception_handler(exc_type, handler)

    # Malformed forms/queries are plain 400s like every other rejected request.
    def validation_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        )
        logger.warning("%s %s -> 400: invalid request (%s)", request.method, request.url.path, problems)
        return PlainTextResponse(f"Invalid request: {problems}", status_code=400)

    app.add_exception_handler(RequestValidationError, validation_handler)


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    cfg = config or load_service_config()

    app = FastAPI(
        title="Image Upload Service",
        version="1.0.0",
        description="Single-directory image upload and viewer service",
    )
    app.state.config = cfg
    app.state.upload_gate = UploadGate(cfg.upload_interval)
    app.state.templates = make_templates(cfg.templates_dir)

    app.add_middleware(CSPMiddleware)

    # Robust request logging (won't crash on exceptions)
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.time()
        try:
            return await call_next(request)
        except Exception as e:
            dt = (time.time() - t0) * 1000
            logger.exception("%s %s -> ERR in %.1fms: %s: %s", request.method, request.url.path, dt, type(e).__name__, e)
            raise

    _register_error_handlers(app)
    register_startup(app)

    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(upload_router)
    app.include_router(images_router)

    if os.path.isdir(cfg.static_dir):
        app.mount("/static", StaticFiles(directory=cfg.static_dir), name="static")
    else:
        logger.warning("Static directory %s not found; /static is not mounted", cfg.static_dir)

    return app


app = create_app()
