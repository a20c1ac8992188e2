"""Base platform interface for donation webhook sources."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, FiniteFloat, ValidationError

from donation_relay.config import Settings


class Platform(str, Enum):
    """Donation services accepted by the webhook endpoint."""
    SAWERIA = "saweria"
    BAGIBAGI = "bagibagi"


class DonationEvent(BaseModel):
    """Canonical donation record shared by the queue and the leaderboard."""
    donator: str
    amount: int | FiniteFloat
    message: str = ""


def message_text(value: Any) -> str:
    """Free-text message; falsy values become an empty string."""
    return str(value) if value else ""


class BasePlatform(ABC):
    """Abstract base class for donation platforms."""

    # Header carrying an HMAC of the payload, for platforms that sign webhooks
    signature_header: str | None = None

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """Return platform tag."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return human-readable platform name."""
        pass

    @abstractmethod
    def matches(self, payload: Mapping[str, Any], headers: Mapping[str, str]) -> bool:
        """Check if the payload and headers come from this platform."""
        pass

    @abstractmethod
    def to_event(self, payload: Mapping[str, Any]) -> DonationEvent:
        """Map a platform payload to a donation event; raises ValidationError."""
        pass

    def webhook_secret(self, settings: Settings) -> str:
        """Return the configured signing secret, empty when unsigned."""
        return ""

    def normalize(self, payload: Mapping[str, Any]) -> DonationEvent | None:
        """Return the canonical event, or None when required fields are missing."""
        try:
            return self.to_event(payload)
        except ValidationError:
            return None
