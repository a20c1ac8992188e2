"""Donation webhook ingestion and game server polling."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from donation_relay.config import Settings, settings
from donation_relay.dependencies import get_settings, get_store
from donation_relay.ingest import IngestResult, ingest_donation
from donation_relay.platforms import DonationEvent
from donation_relay.store import DonationStore


router = APIRouter()

limiter = Limiter(key_func=get_remote_address)


@router.post("", response_model=IngestResult)
@limiter.limit(settings.webhook_rate_limit)
async def receive_donation(
    request: Request,
    payload: dict[str, Any] = Body(...),
    store: DonationStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """Accept a Saweria or Bagi Bagi webhook and queue the donation."""
    headers = {name.lower(): value for name, value in request.headers.items()}
    return await ingest_donation(payload, headers, store, config)


@router.get("", response_model=DonationEvent | None)
async def poll_donation(store: DonationStore = Depends(get_store)):
    """Pop the oldest pending donation; null when the queue is empty."""
    return await store.pop_event()
