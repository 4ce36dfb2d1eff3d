"""FastAPI application entry point for the devtoolbox service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devtoolbox.settings import settings
from devtoolbox.i18n.catalog import available_locales

logger = logging.getLogger("devtoolbox")


def _configure_logging() -> None:
    """Set up logging based on configuration."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    # Quieten noisy third-party loggers
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler -- configures logging on startup."""
    _configure_logging()
    missing = [code for code in settings.SUPPORTED_LOCALES if code not in available_locales()]
    if missing:
        logger.warning("No locale file for configured locale(s): %s", ", ".join(missing))
    logger.info("devtoolbox starting (default locale: %s)", settings.DEFAULT_LOCALE)
    yield
    logger.info("devtoolbox shutting down")


app = FastAPI(
    title="devtoolbox",
    description="URL, Base64, JSON and cron expression tools with localized output.",
    version="0.1.0",
    lifespan=lifespan,
)

# -- CORS ---------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- Routers ------------------------------------------------------------------

from devtoolbox.i18n.routes import router as locale_router  # noqa: E402
from devtoolbox.tools.routes import router as tools_router  # noqa: E402

app.include_router(locale_router)
app.include_router(tools_router)


# -- Health check -------------------------------------------------------------

@app.get("/health", tags=["health"])
def health_check() -> dict:
    """Simple liveness check."""
    return {"status": "healthy"}


def run() -> None:
    """Entry point for the ``devtoolbox`` console script."""
    import uvicorn

    uvicorn.run("devtoolbox.main:app", host=settings.HOST, port=settings.PORT)
