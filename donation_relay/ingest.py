"""Donation ingestion: detect, verify, normalize, then write queue and leaderboard."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from donation_relay.auth.signature import verify_signature
from donation_relay.config import Settings
from donation_relay.errors import InvalidDonationError, InvalidSignatureError, UnknownPlatformError
from donation_relay.platforms import SUPPORTED_PLATFORMS, DonationEvent, Platform, detect_platform
from donation_relay.store import DonationStore


logger = logging.getLogger(__name__)


class IngestResult(BaseModel):
    status: str = "ok"
    platform: Platform
    donator: str


def _is_valid(event: DonationEvent | None) -> bool:
    return bool(event and event.donator and event.amount and event.amount > 0)


async def ingest_donation(
    payload: Mapping[str, Any],
    headers: Mapping[str, str],
    store: DonationStore,
    settings: Settings,
) -> IngestResult:
    """Record one webhook delivery.

    ``headers`` must use lower-case names. Rejected webhooks raise before any
    store write. The queue push and leaderboard increment are separate
    commands; a failure between them leaves the two out of step.
    """
    platform = detect_platform(payload, headers)
    if platform is None:
        logger.warning(f"Rejected webhook from unknown platform (keys: {sorted(payload)})")
        raise UnknownPlatformError(f"Invalid data - unknown platform. Supported: {SUPPORTED_PLATFORMS}")

    tag = platform.platform.value

    if platform.signature_header:
        secret = platform.webhook_secret(settings)
        signature = headers.get(platform.signature_header)
        if secret and not verify_signature(payload, secret, signature):
            logger.warning(f"Rejected {tag} webhook with invalid signature")
            raise InvalidSignatureError(f"Invalid {platform.display_name} signature")

    event = platform.normalize(payload)
    if not _is_valid(event):
        logger.warning(f"Rejected {tag} webhook with invalid data")
        raise InvalidDonationError(f"Invalid data from {tag}")

    await store.push_event(event)
    await store.add_to_leaderboard(event.donator, event.amount)

    logger.info(f"Accepted {tag} donation from {event.donator!r} ({event.amount})")
    return IngestResult(platform=platform.platform, donator=event.donator)
