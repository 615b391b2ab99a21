import logging
import sys
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.router import api_router
from app.config import settings
from app.errors import PipelineError
from app.news.service import build_news_service


def _setup_logging() -> None:
    """Configure application logging."""
    log_format = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
    date_format = "%H:%M:%S"
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # third-party loggers at WARNING, app loggers in detail
    logging.getLogger().setLevel(logging.WARNING)
    logging.getLogger("app").setLevel(level)

    # httpx logs every request URL at INFO, including the apikey query param
    logging.getLogger("httpx").setLevel(logging.WARNING)


_setup_logging()

logger = logging.getLogger("app.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: one shared service for HTTP and websocket callers
    app.state.news_service = build_news_service(settings)
    yield
    # Shutdown
    await app.state.news_service.aclose()


app = FastAPI(
    title="Crypto News Search",
    description="Recent cryptocurrency news with keyword sentiment, served through a TTL cache.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    logger.debug("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "kind": exc.kind},
    )


app.include_router(api_router, prefix="/api/v1")
