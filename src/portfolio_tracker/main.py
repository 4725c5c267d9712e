"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from portfolio_tracker.config.settings import get_settings
from portfolio_tracker.config.logging_config import setup_logging
from portfolio_tracker.repositories.sqlalchemy.database import init_db
from portfolio_tracker.api.routers import transactions_router, portfolio_router, stocks_router
from portfolio_tracker.api.deps import get_price_provider
from portfolio_tracker.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    logger.info(f"Using {get_settings().stock_api_provider} price provider")
    yield
    # Shutdown
    if get_price_provider.cache_info().currsize:
        get_price_provider().close()
        get_price_provider.cache_clear()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Stock portfolio tracking with cached market prices",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(transactions_router)
app.include_router(portfolio_router)
app.include_router(stocks_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
