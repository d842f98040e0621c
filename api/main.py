"""FastAPI application entry point for the playing cards API."""

import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.deps import CardStoreDep
from api.routes import cards, deck
from api.schemas import HealthResponse
from config import config
from core.cards import CardStore
from core.errors import StoreError
from core.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return _error(429, f"Rate limit exceeded: {exc.detail}")


def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Map store errors to their HTTP status."""
    return _error(exc.status_code, exc.message)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 with a short message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return _error(400, message)


def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep the {error} body shape for routing errors such as unknown paths."""
    return _error(exc.status_code, str(exc.detail))


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for anything the routes did not handle."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


def create_app(store: CardStore | None = None) -> FastAPI:
    """
    Build the application around a card store.

    Args:
        store: Store to serve (defaults to a fresh ordered deck)

    Returns:
        A configured FastAPI instance.
    """
    setup_logging(config.log_level)

    app = FastAPI(
        title="Playing Cards API",
        description="In-memory deck of playing cards",
        version="0.1.0",
        debug=config.debug,
    )
    app.state.card_store = store if store is not None else CardStore()

    # Add rate limiter to app state and exception handlers
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # CORS middleware with configurable origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allowed_origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.get("/")
    @limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
    async def health_check(request: Request, store: CardStoreDep) -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", **store.stats())

    # Include routers
    app.include_router(cards.router, prefix="/cards", tags=["cards"])
    app.include_router(deck.router, tags=["deck"])

    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn on the configured host and port."""
    logger.info("Playing Cards API listening on http://%s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    serve()
