"""Donation Relay - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from donation_relay.config import settings
from donation_relay.errors import DonationError
from donation_relay.routers import donations, health, leaderboard
from donation_relay.routers.health import VERSION
from donation_relay.store import UpstashStore


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.store_configured:
        logger.warning("UPSTASH_REDIS_REST_URL not set - donation endpoints will fail")
    if not settings.bagibagi_verification_enabled:
        logger.warning("BAGIBAGI_WEBHOOK_TOKEN not set - BagiBagi signature verification disabled")

    app.state.store = UpstashStore.from_settings(settings)
    try:
        yield
    finally:
        await app.state.store.aclose()


app = FastAPI(
    title="Donation Relay",
    description="Relays Saweria and Bagi Bagi donations to a game server",
    version=VERSION,
    debug=settings.debug,
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = donations.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(DonationError)
async def donation_error_handler(request: Request, exc: DonationError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers (no consumer auth: the game server polls anonymously)
app.include_router(health.router)
app.include_router(donations.router, prefix="/api", tags=["donations"])
app.include_router(leaderboard.router, prefix="/api", tags=["leaderboard"])
