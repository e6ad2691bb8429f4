import os
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .config import Settings
from .logging import setup_logging, RequestIdMiddleware
from .routes.gallery import router as gallery_router
from .routes.uploads import router as uploads_router
from .static import FallbackStaticFiles
from .storage.local_provider import LocalStorageProvider


logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.tz_default)
    app = FastAPI(title=settings.app_name)

    # Shared, read-only state for every request
    app.state.settings = settings
    app.state.storage = LocalStorageProvider(settings.storage, chunk_size=settings.write_chunk_size)

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Routers
    app.include_router(uploads_router)
    app.include_router(gallery_router)

    # Metrics
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app, include_in_schema=False)

    not_found_page = os.path.join(settings.html_dir, settings.not_found_page)

    # Originals and previews
    app.mount(
        "/static",
        FallbackStaticFiles(directory=settings.storage, not_found_page=not_found_page),
        name="static",
    )

    # Site assets take every path no route above claimed
    if os.path.isdir(settings.html_dir):
        app.mount(
            "/",
            FallbackStaticFiles(directory=settings.html_dir, html=True, not_found_page=not_found_page),
            name="html",
        )
    else:
        logger.warning("Static site directory missing, serving API only", html_dir=settings.html_dir)

    return app
