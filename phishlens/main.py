"""PhishLens — adaptive phishing detection service.

FastAPI entry point with lifespan management and CORS.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import api_router
from .config import get_config
from .database import close_engine, create_tables
from .dependencies import get_adaptive_learning, get_enhanced_analyzer
from .middleware.error_handler import register_error_handlers
from .middleware.request_id import RequestIDMiddleware
from .utils.logging import get_logger, setup_logging

config = get_config()
setup_logging(
    debug=config.debug,
    log_dir=config.log_dir,
    log_max_bytes=config.log_max_bytes,
    log_backup_count=config.log_backup_count,
)
logger = get_logger("phishlens.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, load the learning state and build the analyzer."""
    logger.info("phishlens_starting", version=config.version)

    await create_tables(config)

    learning = get_adaptive_learning()
    await learning.initialize()
    get_enhanced_analyzer()

    logger.info("phishlens_started", blacklist_provider=config.blacklist_provider)
    yield

    await close_engine()
    logger.info("phishlens_stopped")


app = FastAPI(
    title=config.app_name,
    description="Adaptive phishing detection for emails, SMS and web content",
    version=config.version,
    lifespan=lifespan,
)

# Register standard error handlers
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in config.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Request ID: added LAST so it runs FIRST
app.add_middleware(RequestIDMiddleware)

app.include_router(api_router)


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok", "version": config.version}


def main():
    """Run the PhishLens server."""
    uvicorn.run(
        "phishlens.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
