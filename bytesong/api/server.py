"""BYTESONG FastAPI server — upload endpoint + static upload page."""

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles

from bytesong import __version__
from bytesong.api.routes.upload import router as upload_router
from bytesong.config import settings

logger = structlog.get_logger()

app = FastAPI(
    title="BYTESONG",
    description="Hash any file into a plucked-string song.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Access log ──
@app.middleware("http")
async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log every request: method, path, status, duration."""
    start = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "http.request",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000, 1),
        client=request.client.host if request.client else None,
    )
    return response


app.include_router(upload_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "bytesong"}


# Static files last so the routes above win
app.mount(
    "/",
    StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
    name="static",
)
