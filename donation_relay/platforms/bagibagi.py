"""Bagi Bagi donation webhooks."""

from typing import Any

from pydantic import BaseModel

from donation_relay.config import Settings
from .base import BasePlatform, DonationEvent, Platform, message_text


TRANSACTION_PREFIX = "bagibagi-"
SIGNATURE_HEADER = "x-bagibagi-signature"


class BagiBagiPayload(BaseModel):
    transaction_id: str | None = None
    name: str
    amount: Any = None
    message: Any = None


class BagiBagiPlatform(BasePlatform):
    """Bagi Bagi webhooks, optionally signed with HMAC-SHA256."""

    signature_header = SIGNATURE_HEADER

    @property
    def platform(self) -> Platform:
        return Platform.BAGIBAGI

    @property
    def display_name(self) -> str:
        return "BagiBagi"

    def matches(self, payload, headers) -> bool:
        transaction_id = payload.get("transaction_id")
        if isinstance(transaction_id, str) and transaction_id.startswith(TRANSACTION_PREFIX):
            return True
        return bool(headers.get(SIGNATURE_HEADER))

    def to_event(self, payload) -> DonationEvent:
        data = BagiBagiPayload.model_validate(payload)
        return DonationEvent(
            donator=data.name.strip(),
            amount=data.amount,
            message=message_text(data.message),
        )

    def webhook_secret(self, settings: Settings) -> str:
        return settings.bagibagi_webhook_token
