import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.api.router import api_router
from app.config import settings
from app.core.exceptions import register_exception_handlers
from app.services.assets import load_assets
from app.services.github import close_github_client


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)

    # Quieten uvicorn access logs (we'll log requests ourselves)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    setup_logging()
    load_assets()
    if settings.site_configured:
        logger.info(f"github-press starting up, serving {settings.site_owner}/{settings.site_repo}")
    else:
        logger.info("github-press starting up, no root site configured")
    yield
    # Shutdown
    await close_github_client()
    logger.info("github-press shutting down")


app = FastAPI(
    title="github-press",
    description="Websites rendered from Markdown in GitHub repositories",
    version="0.1.0",
    lifespan=lifespan,
)

# Proxy headers middleware - trust X-Forwarded-* from the reverse proxy in front of us
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed requests, skipping health checks and stylesheets."""
    path = request.url.path
    if path == "/health" or path.startswith("/assets/"):
        return await call_next(request)

    response = await call_next(request)

    if response.status_code >= 400:
        logger.info(f"{request.method} {path} → {response.status_code}")

    return response


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Page routes end in a catch-all, so they go last
app.include_router(api_router)
