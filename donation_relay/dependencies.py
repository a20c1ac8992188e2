"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from donation_relay.config import Settings, settings
from donation_relay.store import DonationStore


def get_store(request: Request) -> DonationStore:
    """Store created at startup; overridden with a fake in tests."""
    return request.app.state.store


def get_settings() -> Settings:
    return settings
