"""Ingestion pipeline against the in-memory store."""

from __future__ import annotations

import pytest

from donation_relay.auth.signature import sign_payload
from donation_relay.config import Settings
from donation_relay.errors import (
    InvalidDonationError,
    InvalidSignatureError,
    StoreError,
    UnknownPlatformError,
)
from donation_relay.ingest import ingest_donation
from donation_relay.platforms import Platform

from .conftest import WEBHOOK_SECRET, MemoryStore

BAGIBAGI = {"transaction_id": "bagibagi-7", "name": "Siti", "amount": 20000, "message": ""}


class FailingLeaderboardStore(MemoryStore):
    async def add_to_leaderboard(self, donator: str, amount: int | float) -> None:
        raise StoreError("connection reset")


@pytest.mark.asyncio
async def test_saweria_donation_written_to_queue_and_leaderboard(
    store: MemoryStore, settings: Settings
) -> None:
    payload = {"donator_name": "Budi", "amount_raw": 50000, "message": "gg"}

    result = await ingest_donation(payload, {}, store, settings)

    assert result.platform is Platform.SAWERIA
    assert result.donator == "Budi"
    assert store.queue == ['{"donator":"Budi","amount":50000,"message":"gg"}']
    assert store.scores == {"Budi": 50000}


@pytest.mark.asyncio
async def test_unknown_platform_rejected_without_writes(
    store: MemoryStore, settings: Settings
) -> None:
    with pytest.raises(UnknownPlatformError) as excinfo:
        await ingest_donation({"foo": "bar"}, {}, store, settings)

    assert excinfo.value.message == "Invalid data - unknown platform. Supported: Saweria, BagiBagi"
    assert store.queue == []
    assert store.scores == {}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("payload", "platform"),
    [
        ({"donator_name": "   ", "amount_raw": 100}, "saweria"),
        ({"donator_name": "Budi", "amount_raw": 0}, "saweria"),
        ({"donator_name": "Budi", "amount_raw": -5}, "saweria"),
        ({"transaction_id": "bagibagi-1", "amount": 100}, "bagibagi"),
    ],
)
async def test_invalid_data_rejected_without_writes(
    store: MemoryStore, settings: Settings, payload: dict, platform: str
) -> None:
    with pytest.raises(InvalidDonationError) as excinfo:
        await ingest_donation(payload, {}, store, settings)

    assert excinfo.value.message == f"Invalid data from {platform}"
    assert store.queue == []
    assert store.scores == {}


@pytest.mark.asyncio
async def test_bad_signature_rejected_when_secret_configured(
    store: MemoryStore, signed_settings: Settings
) -> None:
    headers = {"x-bagibagi-signature": sign_payload(BAGIBAGI, "wrong-secret")}

    with pytest.raises(InvalidSignatureError) as excinfo:
        await ingest_donation(BAGIBAGI, headers, store, signed_settings)

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid BagiBagi signature"
    assert store.queue == []


@pytest.mark.asyncio
async def test_valid_signature_accepted(store: MemoryStore, signed_settings: Settings) -> None:
    headers = {"x-bagibagi-signature": sign_payload(BAGIBAGI, WEBHOOK_SECRET)}

    result = await ingest_donation(BAGIBAGI, headers, store, signed_settings)

    assert result.platform is Platform.BAGIBAGI
    assert store.scores == {"Siti": 20000}


@pytest.mark.asyncio
async def test_bad_signature_ignored_without_secret(store: MemoryStore, settings: Settings) -> None:
    headers = {"x-bagibagi-signature": "00" * 32}

    result = await ingest_donation(BAGIBAGI, headers, store, settings)

    assert result.platform is Platform.BAGIBAGI


@pytest.mark.asyncio
async def test_leaderboard_failure_leaves_event_queued(settings: Settings) -> None:
    store = FailingLeaderboardStore()

    with pytest.raises(StoreError):
        await ingest_donation({"donator_name": "Budi", "amount_raw": 10}, {}, store, settings)

    assert len(store.queue) == 1
    assert store.scores == {}
