from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from donation_relay.config import settings
from donation_relay.platforms import PLATFORMS


router = APIRouter(tags=["health"])

_startup_time = datetime.now(timezone.utc)

VERSION = "0.1.0"


class EndpointInfo(BaseModel):
    path: str
    description: str
    method: str = "GET"


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    endpoints: list[EndpointInfo]


class IntegrationStatus(BaseModel):
    connected: bool
    status: str


class IntegrationsResponse(BaseModel):
    store: IntegrationStatus
    signature_verification: dict[str, IntegrationStatus]


ENDPOINTS = [
    EndpointInfo(path="/health", description="Service status and API directory"),
    EndpointInfo(path="/health/integrations", description="Store and webhook verification status"),
    EndpointInfo(path="/api", description="Donation webhook ingestion", method="POST"),
    EndpointInfo(path="/api", description="Pop the oldest pending donation"),
    EndpointInfo(path="/api/leaderboard", description="Cumulative donor leaderboard"),
]


def _check_store() -> IntegrationStatus:
    if not settings.store_configured:
        return IntegrationStatus(connected=False, status="UPSTASH_REDIS_REST_URL not configured")
    if not settings.upstash_redis_rest_token:
        return IntegrationStatus(connected=True, status="no access token configured")
    return IntegrationStatus(connected=True, status="ok")


def _check_verification() -> dict[str, IntegrationStatus]:
    result = {}
    for platform in PLATFORMS:
        if not platform.signature_header:
            continue
        if platform.webhook_secret(settings):
            result[platform.platform.value] = IntegrationStatus(connected=True, status="enabled")
        else:
            result[platform.platform.value] = IntegrationStatus(
                connected=False, status="disabled (no webhook secret configured)"
            )
    return result


@router.get("/health", response_model=HealthResponse)
async def health_check():
    uptime = (datetime.now(timezone.utc) - _startup_time).total_seconds()

    return HealthResponse(
        status="ok",
        version=VERSION,
        uptime_seconds=round(uptime, 2),
        endpoints=ENDPOINTS,
    )


@router.get("/health/integrations", response_model=IntegrationsResponse)
async def get_integrations():
    return IntegrationsResponse(
        store=_check_store(),
        signature_verification=_check_verification(),
    )
