"""Shared fixtures: an in-memory store and a TestClient wired to it."""

from __future__ import annotations

import typing as typ

import pytest
from fastapi.testclient import TestClient

from donation_relay.config import Settings
from donation_relay.dependencies import get_settings, get_store
from donation_relay.main import app
from donation_relay.platforms import DonationEvent
from donation_relay.routers.donations import limiter
from donation_relay.store import DonationStore

WEBHOOK_SECRET = "test-webhook-secret"


class MemoryStore(DonationStore):
    """Queue and leaderboard kept in process, mirroring the Redis semantics."""

    def __init__(self) -> None:
        self.queue: list[str] = []
        self.scores: dict[str, float] = {}

    async def push_event(self, event: DonationEvent) -> None:
        self.queue.append(event.model_dump_json())

    async def pop_event(self) -> DonationEvent | None:
        if not self.queue:
            return None
        return DonationEvent.model_validate_json(self.queue.pop(0))

    async def add_to_leaderboard(self, donator: str, amount: int | float) -> None:
        self.scores[donator] = self.scores.get(donator, 0) + amount

    async def leaderboard(self) -> list[typ.Any]:
        ranked = sorted(self.scores.items(), key=lambda item: item[1], reverse=True)
        return [value for pair in ranked for value in pair]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, bagibagi_webhook_token="")


@pytest.fixture
def signed_settings() -> Settings:
    return Settings(_env_file=None, bagibagi_webhook_token=WEBHOOK_SECRET)


def _client(store: MemoryStore, settings: Settings) -> typ.Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(store: MemoryStore, settings: Settings) -> typ.Iterator[TestClient]:
    yield from _client(store, settings)


@pytest.fixture
def signed_client(store: MemoryStore, signed_settings: Settings) -> typ.Iterator[TestClient]:
    yield from _client(store, signed_settings)
