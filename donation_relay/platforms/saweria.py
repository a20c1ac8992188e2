"""Saweria donation webhooks."""

from typing import Any

from pydantic import BaseModel

from .base import BasePlatform, DonationEvent, Platform, message_text


class SaweriaPayload(BaseModel):
    donator_name: str
    amount_raw: Any = None
    message: Any = None


class SaweriaPlatform(BasePlatform):
    """Saweria sends unsigned webhooks identified by their field names."""

    @property
    def platform(self) -> Platform:
        return Platform.SAWERIA

    @property
    def display_name(self) -> str:
        return "Saweria"

    def matches(self, payload, headers) -> bool:
        # amount_raw only needs to be present; a zero amount is rejected later
        return bool(payload.get("donator_name")) and "amount_raw" in payload

    def to_event(self, payload) -> DonationEvent:
        data = SaweriaPayload.model_validate(payload)
        return DonationEvent(
            donator=data.donator_name.strip(),
            amount=data.amount_raw,
            message=message_text(data.message),
        )
