import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .api import links, redirect
from .api.deps import get_store, limiter
from .config import settings
from .core.exceptions import (
    GenerationExhausted,
    InvalidInput,
    ShortLinkError,
    StoreUnavailable,
)
from .database import Base, engine
from .logging_config import setup_logging
from .middleware.logging import RequestLoggingMiddleware
from .schemas.link import HealthResponse
from .store.base import MappingStore

logger = logging.getLogger(__name__)

# Error kind -> HTTP status for the JSON API
ERROR_STATUS = {
    InvalidInput: 400,
    GenerationExhausted: 500,
    StoreUnavailable: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Short link service started (store: %s)", engine.url.render_as_string(hide_password=True))
    yield


async def short_link_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 500)
    if isinstance(exc, StoreUnavailable):
        logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message,
                     exc_info=exc)
        detail = "Service temporarily unavailable"
    elif status_code >= 500:
        detail = "Internal server error"
    else:
        detail = exc.message
    return JSONResponse(status_code=status_code, content={"detail": detail, "error": exc.kind})


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title="Short Links",
        description="Maps long URLs to short codes and redirects them back",
        version="1.0.0",
        lifespan=lifespan
    )

    # Setup rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(ShortLinkError, short_link_error_handler)

    app.add_middleware(RequestLoggingMiddleware)

    # Include routers
    app.include_router(links.router, prefix="/api", tags=["links"])

    @app.get("/health", response_model=HealthResponse)
    def health_check(store: MappingStore = Depends(get_store)):
        """Health check endpoint"""
        database = store.ping()
        return HealthResponse(status="healthy" if database else "unhealthy", database=database)

    # Redirect endpoint (must be last to not conflict with other routes)
    prefix = settings.SHORT_PATH_PREFIX.strip("/")
    app.include_router(redirect.router, prefix=f"/{prefix}" if prefix else "", tags=["redirect"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
