"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import assets, market_data, portfolio
from database import StoreNotConfiguredError, init_db, is_store_configured
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup when a store is configured."""
    try:
        if init_db():
            logger.info("Portfolio store ready")
        else:
            logger.warning("Running without a persisted store; writes will be rejected")
    except Exception:
        logger.warning("Database initialization failed on startup", exc_info=True)
    yield


app = FastAPI(
    title="CSE Portfolio Tracker",
    description="Colombo Stock Exchange quotes and multi-asset portfolio valuation",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreNotConfiguredError)
async def store_not_configured_handler(request: Request, exc: StoreNotConfiguredError):
    """Surface rejected writes instead of dropping them silently."""
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# Include API routers
app.include_router(assets.router)
app.include_router(market_data.router)
app.include_router(portfolio.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "store_configured": is_store_configured()}
